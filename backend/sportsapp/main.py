from contextlib import asynccontextmanager
from typing import List, Tuple

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from sportsapp.core.config import settings
from sportsapp.core.database import Base, init_db, close_db
from sportsapp.core.exceptions import SportsAppError, error_response
from sportsapp.core.logging_config import logger
from sportsapp.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from sportsapp.core.rate_limiter import limiter, rate_limit_exceeded_handler
from sportsapp.core.redis_client import redis_client
from sportsapp.api.v1.endpoints.health import health_payload
from sportsapp.api.v1.router import api_router
from sportsapp.modules.auth.admin_auth import admin_configured
import sportsapp.models  # noqa: F401


PLACEHOLDER_SECRETS = {"", "CHANGE_ME"}


def check_configuration() -> Tuple[List[str], List[str]]:
    """Return (fatal problems, degraded features) for the loaded settings"""
    fatal = [
        f"{name} is not set or still the placeholder"
        for name in ("SECRET_KEY", "JWT_SECRET_KEY")
        if getattr(settings, name) in PLACEHOLDER_SECRETS
    ]
    if not settings.DATABASE_URL:
        fatal.append("DATABASE_URL is not set")

    degraded = []
    if not admin_configured():
        degraded.append("admin login disabled (set ADMIN_PASSWORD or ADMIN_PASSWORD_HASH)")
    if not settings.NEWS_API_KEY:
        degraded.append("sports news unavailable (set NEWS_API_KEY)")
    if not settings.REDIS_URL:
        degraded.append("no Redis: news is not cached and rate limits are per process")
    return fatal, degraded


def validate_critical_config():
    fatal, degraded = check_configuration()
    for problem in fatal:
        logger.critical(f"[Startup] {problem}")
    if fatal:
        raise RuntimeError("Refusing to start: " + "; ".join(fatal))
    for note in degraded:
        logger.warning(f"[Startup] {note}")


async def ensure_database_ready():
    """Create any missing tables; existing tables are left untouched"""
    await init_db()
    logger.info(f"[Startup] Database schema ready ({len(Base.metadata.tables)} tables)")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT}, API {settings.API_VERSION})")

    validate_critical_config()
    await ensure_database_ready()
    await redis_client.connect()

    yield

    logger.info(f"Stopping {settings.APP_NAME}")
    await redis_client.disconnect()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Social network for sports fans and athletes: feed, messaging, drills, tryouts and rewards",
    version="1.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Last added runs first: CORS, then the size cap, headers and tracing
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


@app.exception_handler(SportsAppError)
async def sportsapp_exception_handler(request: Request, exc: SportsAppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}", extra={"error_details": exc.details})
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    message = str(exc) if settings.DEBUG else "An unexpected error occurred"
    return JSONResponse(status_code=500, content={"detail": message})


@app.get("/health", tags=["Health"])
async def health_check():
    return health_payload()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "api": f"/api/{settings.API_VERSION}",
        "docs": "/docs",
    }


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")

settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(settings.UPLOAD_DIR)), name="uploads")


def run():
    import uvicorn
    uvicorn.run(
        "sportsapp.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
