# app/api/deps.py

from functools import partial
from typing import AsyncGenerator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_session
from app.core.rate_limiter import client_ip_headers
from app.services.recaptcha import verify_recaptcha
from app.services.sheets_service import send_to_google_sheets
from app.services.submission_pipeline import SubmissionPipeline
from app.services.submission_store import append_submission


# ------------------------------------------------------------
# DB Session
# ------------------------------------------------------------
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


# ------------------------------------------------------------
# HTTP client pointed at the verification relay
# ------------------------------------------------------------
async def get_relay_client(request: Request) -> AsyncGenerator[httpx.AsyncClient, None]:
    # Relay calls carry the submitter IP, not this server's
    headers = client_ip_headers(request)

    if settings.RECAPTCHA_RELAY_BASE_URL:
        async with httpx.AsyncClient(
            base_url=settings.RECAPTCHA_RELAY_BASE_URL,
            headers=headers,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        ) as client:
            yield client
        return

    # Same process: route through the ASGI app without a network hop
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://relay.internal",
        headers=headers,
    ) as client:
        yield client


# ------------------------------------------------------------
# Submission pipeline wired to the real collaborators
# ------------------------------------------------------------
async def get_submission_pipeline(
    session: AsyncSession = Depends(get_db_session),
    relay_client: httpx.AsyncClient = Depends(get_relay_client),
) -> SubmissionPipeline:
    return SubmissionPipeline(
        verify_human=partial(verify_recaptcha, relay_client),
        persist=partial(append_submission, session),
        mirror=send_to_google_sheets,
    )
