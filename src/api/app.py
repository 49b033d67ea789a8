import logging
import time
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from src.api.error import ClientError
from src.api.routes import auth, clients, invoices, nlp, ocr
from src.depends import engine
import src.domain  # noqa: F401  registers all tables

logger = logging.getLogger(__name__)


def _init_sentry(config):
    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
    )
    logger.info(f"Sentry enabled ({config.SENTRY_ENVIRONMENT})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ready")
    yield
    await engine.dispose()


def create_app(config) -> FastAPI:
    """
    Build the invoice API

    Routers are mounted under config.API_PREFIX; /health is at the root
    and under the prefix.
    """
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        _init_sentry(config)

    app = FastAPI(
        title="Invoice Service",
        description="Invoices, clients, and free-text / image invoice extraction",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({elapsed_ms:.1f} ms)"
            )
            return response

    @app.exception_handler(ClientError)
    async def client_error_handler(request: Request, exc: ClientError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error.code}: {exc.error.message} ({exc.error.reason})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/health", tags=["Health"])
    @app.get(f"{config.API_PREFIX}/health", tags=["Health"], include_in_schema=False)
    async def health():
        return {"status": "ok", "message": "Invoice service is running"}

    for module in (auth, clients, invoices, nlp, ocr):
        app.include_router(module.router, prefix=config.API_PREFIX)

    return app
