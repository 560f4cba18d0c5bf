from datetime import datetime

from pydantic import BaseModel

from ..models.candidate import Candidate
from ..models.interview import Interview
from .candidate import CandidateOut, candidate_out
from .common import CamelModel, as_number, as_utc


class InterviewCreate(BaseModel):
    candidate_id: int
    date: datetime
    interviewer: str
    mode: str = "remote"


class InterviewListQuery(BaseModel):
    candidate_id: int | None = None


class FeedbackUpdate(BaseModel):
    interview_id: int
    rating: float | None = None
    notes: str | None = None


class InterviewOut(CamelModel):
    id: int
    candidate: int
    date: datetime
    interviewer: str
    mode: str
    feedback: dict | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InterviewView(InterviewOut):
    """An interview with its candidate reference expanded to the full record."""

    candidate: CandidateOut | None


class InterviewPage(BaseModel):
    data: list[InterviewView]
    total: int


def _feedback(interview: Interview) -> dict | None:
    if interview.feedback is None:
        return None
    # Only keys that were supplied are present; absent keys stay absent.
    return {key: as_number(value) if key == "rating" else value for key, value in interview.feedback.items()}


def interview_out(interview: Interview) -> InterviewOut:
    return InterviewOut(
        id=interview.id,
        candidate=interview.candidate_id,
        date=as_utc(interview.date),
        interviewer=interview.interviewer,
        mode=interview.mode,
        feedback=_feedback(interview),
        created_by=interview.created_by,
        created_at=as_utc(interview.created_at),
        updated_at=as_utc(interview.updated_at),
    )


def interview_view(interview: Interview, candidate: Candidate | None) -> InterviewView:
    base = interview_out(interview)
    return InterviewView(
        **base.model_dump(exclude={"candidate"}),
        candidate=candidate_out(candidate) if candidate is not None else None,
    )
