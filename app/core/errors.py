# app/core/errors.py

from app.core.constants import MSG_GENERIC_FAILURE


class SubmissionError(Exception):
    """
    Base for every failure the submission pipeline reports to the user.
    `message` is the localized text shown in the status banner.
    """
    resets_challenge = False

    def __init__(self, message: str = MSG_GENERIC_FAILURE):
        super().__init__(message)
        self.message = message


class FormValidationError(SubmissionError):
    """Terms not accepted, malformed mobile/email, missing required field."""


class VerificationError(SubmissionError):
    """Missing challenge value or negative verdict from the relay."""
    resets_challenge = True


class PersistenceError(SubmissionError):
    """Write to the submissions store failed. Nothing was stored."""
    resets_challenge = True


class MirrorError(SubmissionError):
    """Spreadsheet mirror failed after the record was already persisted."""
    resets_challenge = True
