"""
Structured logging with key=value and JSON output support.

Thin wrapper around the standard library ``logging`` module. Event-style
messages (``using_daemon_address``) are followed by keyword fields rendered
either as ``key=value`` pairs or as a single JSON object per line.

The [StructuredFormatter][daemonaddr.core.logger.StructuredFormatter] reads
the fields from the ``structured_kv`` extra attached by
[Logger][daemonaddr.core.logger.Logger]; plain ``logging.getLogger()``
records pass through with the same ``level name message`` prefix.

Examples:
    ```python
    logger = Logger("daemon")
    logger.info("using_daemon_address", address="127.0.0.1", port=2000)
    # info daemon using_daemon_address address=127.0.0.1 port=2000

    Logger("daemon", json_output=True).info("using_daemon_address", port=2000)
    # {"timestamp": "...", "level": "info", "service": "daemon", ...}
    ```
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any, ClassVar


def _truncate(value: Any, limit: int | None) -> str:
    s = str(value)
    if limit and len(s) > limit:
        return s[:limit] + f"...<truncated {len(s) - limit} chars>"
    return s


def format_kv_pairs(
    kwargs: dict[str, Any],
    max_value_length: int | None = 1000,
    prefix: str = " ",
) -> str:
    """Format a dictionary as space-separated key=value pairs.

    Values longer than *max_value_length* are truncated. Empty values and
    values containing whitespace, ``=`` or quotes are escaped and wrapped
    in double quotes.

    Returns:
        Formatted string such as ``' input="a b" port=2000'``, or an empty
        string when *kwargs* is empty.
    """
    if not kwargs:
        return ""

    parts = []
    for k, v in kwargs.items():
        s = _truncate(v, max_value_length)
        if not s or any(c in s for c in ' ="\''):
            escaped = s.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{k}="{escaped}"')
        else:
            parts.append(f"{k}={s}")
    return prefix + " ".join(parts)


class StructuredFormatter(logging.Formatter):
    """Render every record as ``level name message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname.lower()} {record.name} {record.getMessage()}"
        extra: dict[str, Any] = getattr(record, "structured_kv", {})
        if extra:
            base += format_kv_pairs(extra)
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


class Logger:
    """Structured logger that appends keyword arguments as extra fields.

    All public methods mirror the standard logging API with an added
    ``**kwargs`` parameter carrying the structured fields.

    Args:
        name: Name passed to ``logging.getLogger``.
        json_output: Emit one JSON object per record instead of key=value.
        max_value_length: Truncation limit per value (default 1000).
    """

    _DEFAULT_MAX_VALUE_LENGTH: ClassVar[int] = 1000

    def __init__(
        self,
        name: str,
        *,
        json_output: bool = False,
        max_value_length: int | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._json_output = json_output
        self._max_value_length = (
            self._DEFAULT_MAX_VALUE_LENGTH if max_value_length is None else max_value_length
        )

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_json(self, msg: str, level: str, kwargs: dict[str, Any]) -> str:
        record = {
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            "level": level,
            "service": self._logger.name,
            "message": msg,
            **kwargs,
        }
        return json.dumps(record, default=str)

    def _make_extra(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        if not kwargs:
            return {}
        limit = self._max_value_length
        return {
            "structured_kv": {
                k: _truncate(v, limit) if limit and len(str(v)) > limit else v
                for k, v in kwargs.items()
            }
        }

    def _log(self, level: int, msg: str, kwargs: dict[str, Any], *, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._json_output:
            level_name = logging.getLevelName(level).lower()
            self._logger.log(level, self._format_json(msg, level_name, kwargs), exc_info=exc_info)
        else:
            self._logger.log(level, msg, extra=self._make_extra(kwargs), exc_info=exc_info)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at ERROR level with the current exception's traceback."""
        self._log(logging.ERROR, msg, kwargs, exc_info=True)
