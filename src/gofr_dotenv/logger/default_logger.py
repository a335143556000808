"""
Plain stream logger with session tracking.

Writes one human-readable line per call, with no level filtering. The CLI
uses it on stderr for ``--verbose`` so that diagnostics never mix with the
values it prints on stdout.
"""

import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .interface import Logger


class DefaultLogger(Logger):
    """Logger that prints every message to an output stream.

    Example:
        logger = DefaultLogger(output=sys.stderr)
        logger.debug("Merged file", path=".env", keys=3)
    """

    def __init__(
        self,
        name: str = "gofr-dotenv",
        output: Optional[TextIO] = None,
        include_timestamp: bool = True,
    ):
        """Initialize the default logger.

        Args:
            name: Logger name (included in output for identification)
            output: Output stream (default: stderr at call time)
            include_timestamp: Whether to include timestamps in log messages
        """
        self._name = name
        self._session_id = str(uuid.uuid4())
        self._output = output
        self._include_timestamp = include_timestamp

    def get_session_id(self) -> str:
        return self._session_id

    def _format_message(self, level: str, message: str, **kwargs: Any) -> str:
        parts = []

        if self._include_timestamp:
            parts.append(datetime.now(timezone.utc).isoformat())

        parts.append(f"[{level}]")
        parts.append(f"[{self._name}]")
        parts.append(f"[session:{self._session_id[:8]}]")
        parts.append(message)

        if kwargs:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            parts.append(f"({extra})")

        return " ".join(parts)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        formatted = self._format_message(level, message, **kwargs)
        print(formatted, file=self._output or sys.stderr, flush=True)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log("CRITICAL", message, **kwargs)
