# app/api/endpoints/recaptcha.py

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from app.core.config import settings
from app.core.constants import RELAY_INTERNAL_ERROR, RELAY_TOKEN_REQUIRED
from app.core.rate_limiter import get_real_ip, limiter
from app.schemas.recaptcha import RecaptchaErrorResponse, RecaptchaVerifyRequest
from app.services.recaptcha import verify_with_provider

router = APIRouter(prefix="/api", tags=["reCAPTCHA"])


def relay_error(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=RecaptchaErrorResponse(error=error).model_dump(),
    )


async def read_relay_request(request: Request) -> RecaptchaVerifyRequest:
    """
    Parses the relay body. A body that is not JSON raises ValueError;
    JSON of the wrong shape (non-object, non-string token) reads as no token.
    """
    body = await request.json()
    try:
        return RecaptchaVerifyRequest.model_validate(body)
    except ValidationError:
        return RecaptchaVerifyRequest()


@router.post(
    "/verify-recaptcha",
    responses={400: {"model": RecaptchaErrorResponse}, 500: {"model": RecaptchaErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": RecaptchaVerifyRequest.model_json_schema()}},
        }
    },
)
@limiter.limit(settings.VERIFY_RATE_LIMIT)
async def verify_recaptcha_token(request: Request):
    """
    Relays a widget token to Google and returns the verdict as-is.
    A failed verdict is still a 200: callers read `success` from the body.
    """
    try:
        data = await read_relay_request(request)
    except ValueError as e:
        logger.error(f"reCAPTCHA relay received an unreadable body: {e}")
        return relay_error(500, RELAY_INTERNAL_ERROR)

    if not data.token:
        return relay_error(400, RELAY_TOKEN_REQUIRED)

    try:
        verdict = await verify_with_provider(data.token, get_real_ip(request))
    except Exception as e:
        logger.error(f"reCAPTCHA verification error: {e}")
        return relay_error(500, RELAY_INTERNAL_ERROR)

    return JSONResponse(status_code=200, content=verdict)
