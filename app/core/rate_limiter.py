# app/core/rate_limiter.py
from typing import Optional

from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings


# ----------------------------------------------------------------
# 1. CLIENT IP IDENTIFICATION
# ----------------------------------------------------------------
def get_real_ip(request) -> str:
    """
    Identifies the client IP behind proxies.
    Checks X-Forwarded-For (Vercel/Nginx) and X-Real-IP (Cloudflare).
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Leftmost IP is the actual client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


def client_ip_headers(request) -> dict:
    """
    Headers for a relay call made on behalf of `request`.
    The relay then keys its limit (and reports `remoteip`) per submitter
    instead of per server process.
    """
    return {"X-Forwarded-For": get_real_ip(request)}


# ----------------------------------------------------------------
# 2. REDIS CONNECTION STRING
# ----------------------------------------------------------------
def redis_storage_uri(url: Optional[str], tls: bool) -> Optional[str]:
    # Managed Redis (Upstash, DigitalOcean, AWS) usually requires 'rediss://'
    if url and tls and url.startswith("redis://"):
        return "rediss://" + url[len("redis://"):]
    return url


# ----------------------------------------------------------------
# 3. LIMITER
# ----------------------------------------------------------------
def build_limiter() -> Limiter:
    storage_uri = redis_storage_uri(settings.REDIS_URL, settings.REDIS_TLS)

    if not storage_uri:
        logger.warning("REDIS_URL not set. Falling back to in-memory rate limiting.")
        return Limiter(key_func=get_real_ip, enabled=settings.RATE_LIMIT_ENABLED)

    logger.info("Initializing rate limiter with Redis storage")
    return Limiter(
        key_func=get_real_ip,
        storage_uri=storage_uri,
        strategy="fixed-window",
        storage_options={"socket_connect_timeout": 5, "retry_on_timeout": True},
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = build_limiter()
