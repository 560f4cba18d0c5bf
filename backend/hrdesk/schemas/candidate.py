from datetime import datetime

from pydantic import BaseModel

from ..models.candidate import Candidate
from .common import CamelModel, as_number, as_utc


class CandidateCreate(BaseModel):
    name: str
    role: str
    experience: float
    rating: float = 0
    notes: str = ""


class CandidateIdParam(BaseModel):
    candidate_id: int


class CandidateListQuery(BaseModel):
    q: str | None = None
    role: str | None = None
    min_exp: float | None = None


class CandidateOut(CamelModel):
    id: int
    name: str
    role: str
    experience: float | int
    rating: float | int
    notes: str
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CandidatePage(BaseModel):
    data: list[CandidateOut]
    total: int


def candidate_out(candidate: Candidate) -> CandidateOut:
    return CandidateOut(
        id=candidate.id,
        name=candidate.name,
        role=candidate.role,
        experience=as_number(candidate.experience),
        rating=as_number(candidate.rating),
        notes=candidate.notes or "",
        created_by=candidate.created_by,
        created_at=as_utc(candidate.created_at),
        updated_at=as_utc(candidate.updated_at),
    )
