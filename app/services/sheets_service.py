# app/services/sheets_service.py
import httpx
from loguru import logger

from app.core.config import settings
from app.core.errors import MirrorError
from app.schemas.volunteer import Submission


async def send_to_google_sheets(submission: Submission) -> None:
    """
    Mirrors one submission into the staff spreadsheet.
    The sheet side is an Apps Script web app that appends the JSON body as a row.
    """
    url = settings.SHEETS_WEBHOOK_URL
    if not url:
        logger.error("SHEETS_WEBHOOK_URL not configured. Cannot mirror submission.")
        raise MirrorError()

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(url, json=submission.to_record())
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Google Sheets mirror failed: {e}")
            raise MirrorError() from e

    logger.info(f"Submission mirrored to Google Sheets ({submission.timestamp})")
