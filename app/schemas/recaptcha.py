# app/schemas/recaptcha.py
from typing import Optional

from pydantic import BaseModel


class RecaptchaVerifyRequest(BaseModel):
    token: Optional[str] = None


class RecaptchaErrorResponse(BaseModel):
    success: bool = False
    error: str
