# app/schemas/volunteer.py
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import StatusType, VolunteeredChoice


# ------------------------------------------------------------
# FORM STATE (mutated one field at a time by the form view)
# ------------------------------------------------------------
class VolunteerForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(default="", alias="fullName")
    mobile: str = ""
    email: str = ""
    college: str = ""
    university: str = ""
    year: str = ""
    governorate: str = ""
    committee: str = ""
    has_volunteered: VolunteeredChoice = Field(default=VolunteeredChoice.No, alias="hasVolunteered")
    volunteer_history: str = Field(default="", alias="volunteerHistory")
    accept_terms: bool = Field(default=False, alias="acceptTerms")

    def apply(self, change: "FieldChange") -> None:
        """Merge a single field change into the form."""
        if isinstance(change, TextFieldChange):
            setattr(self, TEXT_FIELDS[change.field], change.value)
        elif isinstance(change, VolunteeredChange):
            self.has_volunteered = change.value
        elif isinstance(change, TermsChange):
            self.accept_terms = change.checked
        else:
            raise TypeError(f"Unsupported field change: {change!r}")


# Form input name -> VolunteerForm attribute, for the raw-text fields
TEXT_FIELDS = {
    "fullName": "full_name",
    "mobile": "mobile",
    "email": "email",
    "college": "college",
    "university": "university",
    "year": "year",
    "governorate": "governorate",
    "committee": "committee",
    "volunteerHistory": "volunteer_history",
}

TextFieldName = Literal[
    "fullName", "mobile", "email", "college", "university",
    "year", "governorate", "committee", "volunteerHistory",
]


# ------------------------------------------------------------
# FIELD CHANGES (one variant per kind of input)
# ------------------------------------------------------------
class TextFieldChange(BaseModel):
    kind: Literal["text"] = "text"
    field: TextFieldName
    value: str


class VolunteeredChange(BaseModel):
    kind: Literal["radio"] = "radio"
    field: Literal["hasVolunteered"] = "hasVolunteered"
    value: VolunteeredChoice


class TermsChange(BaseModel):
    kind: Literal["checkbox"] = "checkbox"
    field: Literal["acceptTerms"] = "acceptTerms"
    checked: bool


FieldChange = Annotated[
    Union[TextFieldChange, VolunteeredChange, TermsChange],
    Field(discriminator="kind"),
]


# ------------------------------------------------------------
# SUBMISSION (frozen form snapshot + timestamp)
# ------------------------------------------------------------
class Submission(VolunteerForm):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: str

    def apply(self, change: "FieldChange") -> None:
        raise TypeError("Submission is immutable")

    def to_record(self) -> dict:
        """camelCase payload shared by the store and the spreadsheet mirror."""
        return self.model_dump(mode="json", by_alias=True)


# ------------------------------------------------------------
# STATUS BANNER
# ------------------------------------------------------------
class FormStatus(BaseModel):
    type: Optional[StatusType] = None
    message: str = ""
