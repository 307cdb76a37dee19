# app/services/submission_store.py

import uuid

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import PersistenceError
from app.models.submission import VolunteerSubmission
from app.schemas.volunteer import Submission


# ------------------------------------------------------------
# APPEND SUBMISSION (insert only, auto-generated key)
# ------------------------------------------------------------
async def append_submission(session: AsyncSession, submission: Submission) -> uuid.UUID:
    record = VolunteerSubmission(
        full_name=submission.full_name,
        mobile=submission.mobile,
        email=submission.email,
        governorate=submission.governorate,
        college=submission.college,
        university=submission.university,
        year=submission.year,
        committee=submission.committee,
        has_volunteered=submission.has_volunteered.value,
        volunteer_history=submission.volunteer_history,
        accept_terms=submission.accept_terms,
        timestamp=submission.timestamp,
    )

    session.add(record)

    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to store submission: {e}")
        raise PersistenceError() from e

    logger.info(f"Submission {record.id} stored")
    return record.id


# ------------------------------------------------------------
# LIST SUBMISSIONS (newest first)
# ------------------------------------------------------------
async def list_submissions(session: AsyncSession) -> list[VolunteerSubmission]:
    result = await session.execute(
        select(VolunteerSubmission).order_by(VolunteerSubmission.timestamp.desc())
    )
    return result.scalars().all()
