"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware

from service_booking.api import api_router
from service_booking.core.config import get_settings
from service_booking.core.logging import configure_logging
from service_booking.db.session import dispose_engine

logger = logging.getLogger(__name__)

settings = get_settings()

configure_logging()

_ALLOWED_ORIGINS = [origin for origin in settings.cors_allow_origins if origin]


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Starting %s (%s)", settings.app_name, settings.app_env)
    try:
        yield
    finally:
        try:
            await dispose_engine()
        except Exception:  # pragma: no cover - shutdown is best effort
            logger.exception("Failed to dispose database engine")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_ALLOWED_ORIGINS,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure.with_default_headers()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    await _secure_headers.set_headers_async(response)
    return response


app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
