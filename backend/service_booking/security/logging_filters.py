"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(?P<scheme>[a-z][a-z0-9+]*://)(?P<user>[^:/@\s]+):(?P<password>[^@\s]+)@",
    re.IGNORECASE,
)


def redact(message: str) -> str:
    """Mask the password part of any connection URL in ``message``."""
    return _SENSITIVE_PATTERN.sub(r"\g<scheme>\g<user>:**REDACTED**@", message)


class SensitiveFilter(logging.Filter):
    """Replace database credentials in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        # render first so credentials passed as arguments are scrubbed too
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


__all__ = ["SensitiveFilter", "redact"]
