# app/views/volunteer_form.py

from typing import Mapping, Optional
import uuid

from app.core.config import settings
from app.core.constants import COMMITTEES, GOVERNORATES, RECAPTCHA_FIELD
from app.models.enums import StatusType, VolunteeredChoice
from app.schemas.volunteer import (
    TEXT_FIELDS,
    FieldChange,
    FormStatus,
    TermsChange,
    TextFieldChange,
    VolunteerForm,
    VolunteeredChange,
)
from app.services.submission_pipeline import (
    SubmissionOutcome,
    SubmissionPipeline,
    history_required,
)


class RecaptchaWidget:
    """Server-side handle on the reCAPTCHA widget value posted with the form."""

    def __init__(self, value: Optional[str] = None):
        self._value = value or None
        self.was_reset = False

    def get_value(self) -> Optional[str]:
        return self._value

    def reset(self) -> None:
        self._value = None
        self.was_reset = True


class VolunteerFormView:
    """
    Holds the form state and the status banner for one rendering of the
    registration page. All mutation goes through `handle_change`.
    """

    def __init__(self, form_session: Optional[str] = None):
        self.form = VolunteerForm()
        self.status = FormStatus()
        self.form_session = form_session or uuid.uuid4().hex
        self.is_submitting = False

    # --------------------------------------------------------
    # INPUT
    # --------------------------------------------------------
    def handle_change(self, change: FieldChange) -> None:
        self.form.apply(change)

    def load_posted_fields(self, data: Mapping[str, str]) -> None:
        """
        Replays a posted form as one change event per field.
        Unchecked checkboxes are absent from the body, so `acceptTerms`
        is always replayed.
        """
        for name in TEXT_FIELDS:
            if name in data:
                self.handle_change(TextFieldChange(field=name, value=str(data[name])))

        if "hasVolunteered" in data:
            try:
                choice = VolunteeredChoice(data["hasVolunteered"])
            except ValueError:
                choice = VolunteeredChoice.No
            self.handle_change(VolunteeredChange(value=choice))

        self.handle_change(TermsChange(checked=_is_checked(data.get("acceptTerms"))))

    # --------------------------------------------------------
    # RENDERING RULES
    # --------------------------------------------------------
    def visible_fields(self) -> list[str]:
        fields = [name for name in TEXT_FIELDS if name != "volunteerHistory"]
        fields += ["hasVolunteered", "acceptTerms"]
        if history_required(self.form):
            fields.append("volunteerHistory")
        return fields

    def is_required(self, field: str) -> bool:
        if field == "volunteerHistory":
            return history_required(self.form)
        return field in TEXT_FIELDS

    # --------------------------------------------------------
    # SUBMIT
    # --------------------------------------------------------
    async def submit(self, pipeline: SubmissionPipeline, widget: RecaptchaWidget) -> SubmissionOutcome:
        self.is_submitting = True
        outcome = await pipeline.submit(
            self.form,
            widget,
            key=self.form_session,
            on_status=self._set_status,
        )
        self._set_status(outcome.status)
        self.is_submitting = outcome.succeeded
        return outcome

    def _set_status(self, status: FormStatus) -> None:
        self.status = status

    def context(self) -> dict:
        return {
            "form": self.form.model_dump(mode="json", by_alias=True),
            "status": self.status,
            "form_session": self.form_session,
            "show_history": history_required(self.form),
            "is_submitting": self.is_submitting,
            "governorates": GOVERNORATES,
            "committees": COMMITTEES,
            "yes": VolunteeredChoice.Yes.value,
            "no": VolunteeredChoice.No.value,
            "site_key": settings.RECAPTCHA_SITE_KEY,
            "recaptcha_field": RECAPTCHA_FIELD,
            "status_error": StatusType.Error.value,
        }


def _is_checked(value) -> bool:
    return str(value).lower() in ("on", "true", "1", "yes")
