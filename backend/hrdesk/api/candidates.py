import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.candidate import (
    CandidateCreate,
    CandidateIdParam,
    CandidateListQuery,
    CandidateOut,
    CandidatePage,
    candidate_out,
)
from ..services import candidate_store
from ..utils.error_handlers import NotFoundError, get_error_message
from ..utils.pagination import parse_pagination
from ..utils.roles import hr_only
from ..utils.validation import (
    body,
    is_numeric,
    is_record_id,
    is_string,
    not_empty,
    param,
    query,
    validate_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["Candidates"])


CREATE_RULES = [
    body("name", not_empty("Name required")),
    body("role", not_empty("Role required")),
    body("experience", is_numeric("Experience must be numeric", min_value=0)),
    body("rating", is_numeric("Rating must be numeric"), required=False),
    body("notes", is_string("Notes must be a string"), required=False),
]

LIST_RULES = [
    query("q", is_string()),
    query("role", is_string()),
    query("minExp", is_numeric("minExp must be numeric"), field="min_exp"),
]

DETAIL_RULES = [
    param("id", is_record_id, field="candidate_id"),
]


@router.post("", response_model=CandidateOut, status_code=201)
def create_candidate(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    req = validate_request(CREATE_RULES, CandidateCreate, body=payload)
    candidate = candidate_store.create_candidate(
        db,
        name=req.name,
        role=req.role,
        experience=req.experience,
        rating=req.rating,
        notes=req.notes,
        created_by=user.get("userId"),
    )
    logger.info("Candidate %s created by user %s", candidate.id, user.get("userId"))
    return candidate_out(candidate)


@router.get("", response_model=CandidatePage)
def list_candidates(
    q: str | None = Query(default=None),
    role: str | None = Query(default=None),
    min_exp: str | None = Query(default=None, alias="minExp"),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    # Empty query values mean "no filter".
    raw = {k: v for k, v in {"q": q, "role": role, "minExp": min_exp}.items() if v}
    flt = validate_request(LIST_RULES, CandidateListQuery, query=raw)
    rows, total = candidate_store.list_candidates(
        db,
        candidate_store.CandidateFilter(q=flt.q, role=flt.role, min_exp=flt.min_exp),
        parse_pagination(page, limit),
    )
    return CandidatePage(data=[candidate_out(c) for c in rows], total=total)


@router.get("/{candidate_id}", response_model=CandidateOut)
def get_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    req = validate_request(DETAIL_RULES, CandidateIdParam, params={"id": candidate_id})
    candidate = candidate_store.get_candidate(db, req.candidate_id)
    if not candidate:
        raise NotFoundError(get_error_message("candidate_not_found"))
    return candidate_out(candidate)
