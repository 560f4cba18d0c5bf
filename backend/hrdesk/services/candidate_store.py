"""Persistence and filtered listing for candidate records."""
from dataclasses import dataclass

from sqlalchemy.orm import Query, Session

from ..models.candidate import Candidate
from ..utils.pagination import Pagination, paginate


@dataclass
class CandidateFilter:
    q: str | None = None
    role: str | None = None
    min_exp: float | None = None


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create_candidate(
    db: Session,
    *,
    name: str,
    role: str,
    experience: float,
    rating: float = 0,
    notes: str = "",
    created_by: int | None = None,
) -> Candidate:
    if experience < 0:
        raise ValueError("experience must be non-negative")
    candidate = Candidate(
        name=name,
        role=role,
        # float() so integral values too wide for INTEGER still bind as REAL.
        experience=float(experience),
        rating=float(rating),
        notes=notes,
        created_by=created_by,
    )
    db.add(candidate)
    db.commit()
    db.refresh(candidate)
    return candidate


def get_candidate(db: Session, candidate_id: int) -> Candidate | None:
    return db.get(Candidate, candidate_id)


def get_candidates_by_ids(db: Session, candidate_ids: set[int]) -> dict[int, Candidate]:
    if not candidate_ids:
        return {}
    rows = db.query(Candidate).filter(Candidate.id.in_(candidate_ids)).all()
    return {c.id: c for c in rows}


def _filtered(db: Session, flt: CandidateFilter) -> Query:
    query = db.query(Candidate)
    if flt.q:
        query = query.filter(Candidate.name.ilike(f"%{_escape_like(flt.q)}%", escape="\\"))
    if flt.role:
        query = query.filter(Candidate.role == flt.role)
    if flt.min_exp is not None:
        query = query.filter(Candidate.experience >= float(flt.min_exp))
    return query


def list_candidates(db: Session, flt: CandidateFilter, pagination: Pagination) -> tuple[list[Candidate], int]:
    """Newest first. Returns (page of records, total matching the filter)."""
    query = _filtered(db, flt).order_by(Candidate.created_at.desc(), Candidate.id.desc())
    return paginate(query, pagination)
