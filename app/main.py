# app/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import sys

from app.core.database import test_connection, init_db
from app.core.config import settings
from app.core.rate_limiter import limiter

# Routers
from app.api.endpoints import (
    recaptcha as recaptcha_router,
    volunteer_form as volunteer_form_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level=settings.LOG_LEVEL.upper(),
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.DEBUG,
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Volunteer Registration Form",
    version="1.0.0",
    description="Volunteer registration form with reCAPTCHA relay and Google Sheets mirroring.",
)

DB_STATUS = "Connecting..."

# ------------------------------------------------------------
# RATE LIMITING
# ------------------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(recaptcha_router.router)
app.include_router(volunteer_form_router.router)

# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    global DB_STATUS
    logger.info("Starting Volunteer Registration Form...")

    try:
        await test_connection()
        DB_STATUS = "Connected"
        logger.success("Database connection established.")
    except Exception:
        DB_STATUS = "Error"
        logger.exception("Database connection failed. Submissions will fail until it recovers.")

    if DB_STATUS == "Connected":
        try:
            await init_db()
            logger.success("Database tables ready.")
        except Exception as e:
            logger.warning(f"Table initialization encountered an issue: {e}")

    if not settings.SHEETS_WEBHOOK_URL:
        logger.warning("SHEETS_WEBHOOK_URL is not set. Every submission will fail at the mirror step.")

    logger.success("Startup completed.")


# ------------------------------------------------------------
# HEALTH CHECK
# ------------------------------------------------------------
@app.get("/health", tags=["System"])
async def health():
    return {
        "status": "ok",
        "service": "Volunteer Registration Form",
        "version": app.version,
        "database": DB_STATUS,
    }
