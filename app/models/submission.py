from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Text, Boolean, String
from uuid import uuid4
import uuid

from app.core.constants import SUBMISSIONS_COLLECTION


class VolunteerSubmission(SQLModel, table=True):
    """Append-only record of one accepted registration."""
    __tablename__ = SUBMISSIONS_COLLECTION

    id: uuid.UUID = Field(default_factory=uuid4, primary_key=True)

    # Personal
    full_name: str = Field(sa_column=Column(String, nullable=False))
    mobile: str = Field(sa_column=Column(String, nullable=False))
    email: str = Field(sa_column=Column(String, nullable=False))
    governorate: str = Field(sa_column=Column(String, nullable=False))

    # Academic
    college: str = Field(sa_column=Column(String, nullable=False))
    university: str = Field(sa_column=Column(String, nullable=False))
    year: str = Field(sa_column=Column(String, nullable=False))

    # Volunteering
    committee: str = Field(sa_column=Column(String, nullable=False))
    has_volunteered: str = Field(sa_column=Column(String, nullable=False))
    volunteer_history: str = Field(default="", sa_column=Column(Text, nullable=False))

    accept_terms: bool = Field(sa_column=Column(Boolean, nullable=False))

    # ISO-8601, same string that is sent to the spreadsheet
    timestamp: str = Field(sa_column=Column(String, nullable=False, index=True))
