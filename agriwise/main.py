"""FastAPI application entrypoint — lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from agriwise.config import get_settings
from agriwise.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from agriwise.middleware.rate_limit import RateLimitMiddleware
from agriwise.routes import chat, crops, simulations, weather

logger = structlog.get_logger("agriwise")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Connect to Redis when configured (enables proxy rate limiting)

    Shutdown:
      1. Close Redis connection pool
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "AgriWise starting",
        log_level=settings.log_level,
        rate_limiting=bool(settings.redis_url),
        chat_gateway_configured=bool(settings.chat_gateway_api_key),
    )

    redis: Redis | None = None
    app.state.redis = None
    try:
        if settings.redis_url:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.redis = redis
    except Exception as exc:
        logger.exception("startup failure", error=str(exc))
        raise

    yield

    logger.info("AgriWise shutting down")
    if redis is not None:
        await redis.aclose()


app = FastAPI(
    title="AgriWise API",
    description=(
        "Farmer advisory API — crop encyclopedia, seasonal planting calendar, "
        "rule-based crop-outcome simulator, and proxies to an AI chat gateway "
        "and a public weather service."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


# ── Error mapping ───────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input is a 400, matching the proxies' published contract."""
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "message": str(error.get("msg", ""))}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "error": "validation_error",
                "message": "Request payload is invalid",
                "errors": errors,
            }
        },
    )


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "agriwise",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(simulations.router, prefix="/api/v1")
app.include_router(crops.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")
app.include_router(weather.router, prefix="/api/v1")
