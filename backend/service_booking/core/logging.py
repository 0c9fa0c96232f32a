"""Root logging configuration."""

from __future__ import annotations

import logging

from asgi_correlation_id import CorrelationIdFilter

from service_booking.core.config import get_settings
from service_booking.security.logging_filters import SensitiveFilter

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def configure_logging() -> None:
    """Install the correlation id and redaction filters on the app loggers."""
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

    for handler in root.handlers:
        if not any(isinstance(flt, CorrelationIdFilter) for flt in handler.filters):
            handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))

    for _logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
        _logger = logging.getLogger(_logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in _logger.filters):
            _logger.addFilter(SensitiveFilter())
