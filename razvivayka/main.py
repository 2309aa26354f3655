"""
razvivayka/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (companion app API, Telegram webhook)
- Starts and stops the Telegram bot and the reminder scheduler
- No business logic should be written here
"""

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import asyncio
import time

from razvivayka.core.config import settings, validate_settings
from razvivayka.core.context import AppContext
from razvivayka.core.errors import add_exception_handlers
from razvivayka.core.logging import setup_logging, get_logger
from razvivayka.api import telegram, webhook
from razvivayka.api.deps import get_app_context
from razvivayka.bot import start_bot, stop_bot
from razvivayka.services.scheduler_service import NotificationScheduler
from razvivayka.utils.time_utils import utc_now

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


async def shutdown_services(ctx: AppContext):
    """
    Stops timers and listeners before releasing storage.
    """
    if ctx.scheduler is not None:
        ctx.scheduler.shutdown()
        ctx.scheduler = None

    if ctx.transport is not None:
        expired = await ctx.ephemeral.flush_all(ctx.transport)
        if expired:
            logger.info(f"Removed {expired} pending temporary message(s)")

    await stop_bot(ctx)
    ctx.store.flush()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting Razvivayka reminder service...")
    ctx = AppContext.from_settings(settings)
    app.state.ctx = ctx

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        users = await asyncio.to_thread(ctx.store.load)
        logger.info(f"✅ User store loaded: {len(users)} user(s) from {ctx.store.path}")

        if settings.telegram_enabled:
            await start_bot(ctx)
            logger.info(f"✅ Telegram bot started ({settings.TELEGRAM_MODE})")

            ctx.scheduler = NotificationScheduler(
                ctx,
                interval_seconds=settings.SCHEDULER_INTERVAL_SECONDS,
                flush_seconds=settings.EPHEMERAL_FLUSH_SECONDS,
            )
            ctx.scheduler.start()
        else:
            logger.warning("⚠️ TELEGRAM_MODE=disabled: bot and reminders are off")

        logger.info("🎉 Razvivayka started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        await shutdown_services(ctx)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down Razvivayka...")

    try:
        await shutdown_services(ctx)
        logger.info("👋 Razvivayka shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title="Razvivayka reminder bot",
    description="Telegram reminders for developmental activities with children",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(telegram.router, prefix="/api/telegram", tags=["Telegram"])
app.include_router(webhook.router, prefix="/telegram", tags=["Webhook"])


@app.get("/", tags=["Health"])
async def root(ctx: AppContext = Depends(get_app_context)):
    """Liveness/status payload."""
    users = await asyncio.to_thread(ctx.store.load)
    return {
        "status": "running",
        "name": "Razvivayka reminder bot",
        "users": len(users),
        "enabled": sum(1 for user in users if user.enabled),
        "uptime": int((utc_now() - ctx.started_at).total_seconds()),
    }


@app.get("/health", tags=["Health"])
async def health_check(ctx: AppContext = Depends(get_app_context)):
    """
    Checks the user store and bot state.
    """
    store_ok = await asyncio.to_thread(ctx.store.is_readable)
    health_status = {
        "status": "healthy" if store_ok else "unhealthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "checks": {
            "store": "healthy" if store_ok else "unhealthy",
            "telegram": "running" if ctx.telegram_app is not None else "stopped",
            "scheduler": "running" if ctx.scheduler is not None else "stopped",
        },
    }
    status_code = 200 if store_ok else 503
    return JSONResponse(content=health_status, status_code=status_code)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "razvivayka.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
