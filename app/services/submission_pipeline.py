# app/services/submission_pipeline.py

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Protocol
import uuid

from loguru import logger

from app.core.config import settings
from app.core.constants import (
    COMMITTEES,
    EMAIL_PATTERN,
    GOVERNORATES,
    MOBILE_PATTERN,
    MSG_CHECKING_DATA,
    MSG_CHECKING_RECAPTCHA,
    MSG_GENERIC_FAILURE,
    MSG_HISTORY_REQUIRED,
    MSG_INVALID_COMMITTEE,
    MSG_INVALID_EMAIL,
    MSG_INVALID_GOVERNORATE,
    MSG_INVALID_MOBILE,
    MSG_RECAPTCHA_FAILED,
    MSG_RECAPTCHA_MISSING,
    MSG_REQUIRED_FIELD,
    MSG_SENDING,
    MSG_SUCCESS,
    MSG_TERMS_REQUIRED,
)
from app.core.errors import (
    FormValidationError,
    SubmissionError,
    VerificationError,
)
from app.models.enums import PipelineState, StatusType, VolunteeredChoice
from app.schemas.volunteer import FormStatus, Submission, VolunteerForm


class ChallengeWidget(Protocol):
    def get_value(self) -> Optional[str]: ...
    def reset(self) -> None: ...


# ------------------------------------------------------------
# IN-FLIGHT GUARD
# ------------------------------------------------------------
class InFlightGuard:
    """
    Tracks form sessions with a submission in progress.
    Not a lock: a blocked caller is dropped, never queued.
    """

    def __init__(self):
        self._keys: set[str] = set()

    def acquire(self, key: str) -> bool:
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def release(self, key: str) -> None:
        self._keys.discard(key)

    def is_set(self, key: str) -> bool:
        return key in self._keys


# Process-wide, shared by every request
submission_guard = InFlightGuard()


# ------------------------------------------------------------
# FIELD GATES
# ------------------------------------------------------------
REQUIRED_TEXT_FIELDS = ("full_name", "mobile", "email", "college", "university", "year")


def history_required(form: VolunteerForm) -> bool:
    return form.has_volunteered == VolunteeredChoice.Yes


def validate_mobile(form: VolunteerForm) -> None:
    if not MOBILE_PATTERN.match(form.mobile):
        raise FormValidationError(MSG_INVALID_MOBILE)


def validate_email(form: VolunteerForm) -> None:
    if not EMAIL_PATTERN.match(form.email):
        raise FormValidationError(MSG_INVALID_EMAIL)


def validate_required_fields(form: VolunteerForm) -> None:
    for name in REQUIRED_TEXT_FIELDS:
        if not getattr(form, name).strip():
            raise FormValidationError(MSG_REQUIRED_FIELD)

    if form.governorate not in GOVERNORATES:
        raise FormValidationError(MSG_INVALID_GOVERNORATE)

    if form.committee not in COMMITTEES:
        raise FormValidationError(MSG_INVALID_COMMITTEE)

    if history_required(form) and not form.volunteer_history.strip():
        raise FormValidationError(MSG_HISTORY_REQUIRED)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ------------------------------------------------------------
# OUTCOME
# ------------------------------------------------------------
@dataclass
class SubmissionOutcome:
    state: PipelineState
    status: FormStatus
    redirect_to: Optional[str] = None
    submission: Optional[Submission] = None
    record_id: Optional[uuid.UUID] = None

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.Redirecting


# ------------------------------------------------------------
# PIPELINE
# ------------------------------------------------------------
class SubmissionPipeline:
    """
    validate -> verify human -> persist -> mirror -> redirect.

    Every gate is fatal: the first failure aborts the run, is turned into a
    localized status message, and (once verification has been attempted)
    resets the challenge widget so a fresh token is needed.
    """

    def __init__(
        self,
        verify_human: Callable[[str], Awaitable[bool]],
        persist: Callable[[Submission], Awaitable[Any]],
        mirror: Callable[[Submission], Awaitable[None]],
        guard: InFlightGuard = submission_guard,
        success_path: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.verify_human = verify_human
        self.persist = persist
        self.mirror = mirror
        self.guard = guard
        self.success_path = success_path or settings.SUCCESS_PATH
        self.clock = clock
        self.state = PipelineState.Idle

    def _transition(self, state: PipelineState) -> None:
        logger.debug(f"Submission pipeline: {self.state.value} -> {state.value}")
        self.state = state

    async def submit(
        self,
        form: VolunteerForm,
        widget: ChallengeWidget,
        key: str = "default",
        on_status: Optional[Callable[[FormStatus], None]] = None,
    ) -> SubmissionOutcome:

        def notify(message: str) -> None:
            if on_status:
                on_status(FormStatus(type=StatusType.Info, message=message))

        # 1) Re-entrancy guard
        if not self.guard.acquire(key):
            logger.info(f"Submission already in flight for form session {key}. Dropped.")
            return SubmissionOutcome(
                state=PipelineState.Idle,
                status=FormStatus(type=StatusType.Info, message=MSG_SENDING),
            )

        verification_attempted = False
        snapshot = form.model_copy(deep=True)

        try:
            self._transition(PipelineState.Validating)
            notify(MSG_CHECKING_DATA)

            # 2) Terms
            if not snapshot.accept_terms:
                raise FormValidationError(MSG_TERMS_REQUIRED)

            # 3) Challenge present
            token = widget.get_value()
            if not token:
                raise VerificationError(MSG_RECAPTCHA_MISSING)

            # 4) Human verification
            self._transition(PipelineState.VerifyingHuman)
            notify(MSG_CHECKING_RECAPTCHA)
            verification_attempted = True
            if not await self.verify_human(token):
                raise VerificationError(MSG_RECAPTCHA_FAILED)

            # 5-6) Mobile / email, then required and conditional fields
            validate_mobile(snapshot)
            validate_email(snapshot)
            validate_required_fields(snapshot)

            # 7) Freeze
            submission = Submission(**snapshot.model_dump(), timestamp=utc_timestamp(self.clock()))

            # 8-9) Persist, then mirror
            self._transition(PipelineState.Submitting)
            notify(MSG_SENDING)
            record_id = await self.persist(submission)
            await self.mirror(submission)

            # 10) Redirect
            self._transition(PipelineState.Redirecting)
            logger.info(f"Submission {record_id} accepted")
            return SubmissionOutcome(
                state=PipelineState.Redirecting,
                status=FormStatus(type=StatusType.Success, message=MSG_SUCCESS),
                redirect_to=self.success_path,
                submission=submission,
                record_id=record_id,
            )

        except SubmissionError as e:
            logger.warning(f"Submission rejected ({type(e).__name__}): {e.message}")
            return self._fail(widget, e.message, verification_attempted or e.resets_challenge)

        except Exception:
            logger.exception("Unexpected error while submitting form")
            return self._fail(widget, MSG_GENERIC_FAILURE, verification_attempted)

        finally:
            self.guard.release(key)

    def _fail(self, widget: ChallengeWidget, message: str, reset_widget: bool) -> SubmissionOutcome:
        self._transition(PipelineState.Failed)
        if reset_widget:
            widget.reset()
        return SubmissionOutcome(
            state=PipelineState.Failed,
            status=FormStatus(type=StatusType.Error, message=message),
        )
