"""Logging setup: severity-prefixed stderr lines or syslog."""

import logging
import logging.handlers
import os
import sys
from typing import Optional

PROGRAM_NAME = "turris-nightlight"
SYSLOG_SOCKET = "/dev/log"

SEVERITY_KEYWORDS = {
    logging.CRITICAL: "Error",
    logging.ERROR: "Error",
    logging.WARNING: "Warning",
    logging.INFO: "Info",
    logging.DEBUG: "Debug",
}

_handler: Optional[logging.Handler] = None


class SeverityFormatter(logging.Formatter):
    """Format records as ``Error: message`` / ``Warning: message`` / ``Info: message``."""

    def format(self, record: logging.LogRecord) -> str:
        keyword = SEVERITY_KEYWORDS.get(record.levelno, record.levelname.title())
        return f"{keyword}: {record.getMessage()}"


def _syslog_handler() -> logging.Handler:
    address = SYSLOG_SOCKET if os.path.exists(SYSLOG_SOCKET) else ("localhost", 514)
    handler = logging.handlers.SysLogHandler(address=address)
    handler.ident = f"{PROGRAM_NAME}: "
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(device: str = "stderr") -> None:
    """Route root-logger output to ``device`` (stderr or syslog).

    Only the handler installed by a previous call is replaced; other handlers
    on the root logger are left alone.
    """
    global _handler
    root = logging.getLogger()

    if device == "syslog":
        handler = _syslog_handler()
    elif device == "stderr":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(SeverityFormatter())
    else:
        raise ValueError(f"invalid logging device '{device}'")

    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    _handler = handler
