import logging
import os
import time
from datetime import datetime, timezone
from typing import Optional

import sentry_sdk
import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from sentry_sdk.integrations.fastapi import FastApiIntegration
from slowapi.util import get_remote_address

from . import schemas
from .config import Settings
from .errors import TooManyRequests, register_error_handlers
from .routes import ai, auth, dao, ideas, ipfs, nfts, payments
from .services.chain import ChainGateway
from .services.content_storage import ContentStorageGateway
from .services.inference import InferenceGateway

VERSION = "1.0.0"

logger = logging.getLogger("ideaforge")

REQUEST_COUNT = Counter("request_count", "Total requests", ["method", "endpoint"])
REQUEST_LATENCY = Histogram(
    "request_latency_seconds", "Request latency", ["endpoint"]
)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; img-src 'self' data: https:"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.WARNING if settings.is_production else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def rate_limiter(settings: Settings):
    """Per-client fixed window shared by every route, included routers too."""
    limit = parse(settings.rate_limit)
    window = FixedWindowRateLimiter(MemoryStorage())

    def enforce_rate_limit(request: Request) -> None:
        if not window.hit(limit, get_remote_address(request)):
            raise TooManyRequests()

    return enforce_rate_limit


def create_app(
    settings: Optional[Settings] = None,
    *,
    chain: Optional[ChainGateway] = None,
    storage: Optional[ContentStorageGateway] = None,
    inference: Optional[InferenceGateway] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            integrations=[FastApiIntegration()],
        )

    dependencies = []
    if os.getenv("TESTING") != "1":
        dependencies.append(Depends(rate_limiter(settings)))

    app = FastAPI(title="IdeaForge API", version=VERSION, dependencies=dependencies)
    app.state.settings = settings
    app.state.chain = chain or ChainGateway.from_settings(settings)
    app.state.storage = storage or ContentStorageGateway.from_settings(settings)
    app.state.inference = inference or InferenceGateway.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def record_metrics(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        endpoint = request.url.path
        REQUEST_COUNT.labels(request.method, endpoint).inc()
        REQUEST_LATENCY.labels(endpoint).observe(time.time() - start)
        return response

    @app.get("/metrics")
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    def health():
        return schemas.ok(
            {
                "status": "ok",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "version": VERSION,
                "environment": settings.environment,
            }
        )

    app.include_router(auth.router)
    app.include_router(ideas.router)
    app.include_router(nfts.router)
    app.include_router(dao.router)
    app.include_router(payments.router)
    app.include_router(ai.router)
    app.include_router(ipfs.router)

    logger.info("IdeaForge API configured for %s", settings.environment)
    return app


if __name__ == "__main__":
    _settings = Settings.from_env()
    uvicorn.run(create_app(_settings), host=_settings.host, port=_settings.port)
