"""Persistence for interview bookings and their feedback."""
from datetime import datetime

from sqlalchemy.orm import Session

from ..models.interview import Interview
from ..utils.pagination import Pagination, paginate

INTERVIEW_MODES = ("onsite", "remote")


def create_interview(
    db: Session,
    *,
    candidate_id: int,
    date: datetime,
    interviewer: str,
    mode: str = "remote",
    created_by: int | None = None,
) -> Interview:
    if mode not in INTERVIEW_MODES:
        raise ValueError(f"mode must be one of {INTERVIEW_MODES}")
    interview = Interview(
        candidate_id=candidate_id,
        date=date,
        interviewer=interviewer,
        mode=mode,
        created_by=created_by,
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


def get_interview(db: Session, interview_id: int) -> Interview | None:
    return db.get(Interview, interview_id)


def list_interviews(
    db: Session, *, candidate_id: int | None, pagination: Pagination
) -> tuple[list[Interview], int]:
    """Latest interview date first. Returns (page of records, total matching the filter)."""
    query = db.query(Interview)
    if candidate_id is not None:
        query = query.filter(Interview.candidate_id == candidate_id)
    query = query.order_by(Interview.date.desc(), Interview.id.desc())
    return paginate(query, pagination)


def replace_feedback(
    db: Session,
    interview: Interview,
    *,
    rating: float | None = None,
    notes: str | None = None,
) -> Interview:
    """
    Overwrite the feedback object with one holding only the fields given here.

    Fields set by an earlier call and not supplied now are dropped.
    """
    feedback: dict = {}
    if rating is not None:
        feedback["rating"] = rating
    if notes is not None:
        feedback["notes"] = notes
    # A new dict object, so SQLAlchemy sees the JSON column as changed.
    interview.feedback = feedback
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview
