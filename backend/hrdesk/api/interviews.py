import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.interview import (
    FeedbackUpdate,
    InterviewCreate,
    InterviewListQuery,
    InterviewOut,
    InterviewPage,
    interview_out,
    interview_view,
)
from ..services import candidate_store, interview_store
from ..utils.error_handlers import NotFoundError, get_error_message
from ..utils.pagination import parse_pagination
from ..utils.roles import hr_only
from ..utils.validation import (
    body,
    is_datetime,
    is_in,
    is_numeric,
    is_record_id,
    is_string,
    not_empty,
    param,
    query,
    validate_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interviews", tags=["Interviews"])

CREATE_RULES = [
    body("candidate", is_record_id, field="candidate_id"),
    body("date", is_datetime),
    body("interviewer", not_empty("Interviewer required")),
    body("mode", is_in(interview_store.INTERVIEW_MODES), required=False),
]

LIST_RULES = [
    query("candidateId", is_record_id, field="candidate_id"),
]

FEEDBACK_RULES = [
    param("id", is_record_id, field="interview_id"),
    body("rating", is_numeric("Rating must be numeric"), required=False),
    body("notes", is_string("Notes must be a string"), required=False),
]


@router.post("", response_model=InterviewOut, status_code=201)
def schedule_interview(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    req = validate_request(CREATE_RULES, InterviewCreate, body=payload)

    # Not atomic with the insert below; candidates are never deleted.
    if not candidate_store.get_candidate(db, req.candidate_id):
        raise NotFoundError(get_error_message("candidate_not_found"))

    interview = interview_store.create_interview(
        db,
        candidate_id=req.candidate_id,
        date=req.date,
        interviewer=req.interviewer,
        mode=req.mode,
        created_by=user.get("userId"),
    )
    logger.info("Interview %s scheduled for candidate %s", interview.id, req.candidate_id)
    return interview_out(interview)


@router.get("", response_model=InterviewPage)
def list_interviews(
    candidate_id: str | None = Query(default=None, alias="candidateId"),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    flt = validate_request(LIST_RULES, InterviewListQuery, query={"candidateId": candidate_id} if candidate_id else None)
    rows, total = interview_store.list_interviews(
        db,
        candidate_id=flt.candidate_id,
        pagination=parse_pagination(page, limit),
    )

    # Expand candidate references with one extra query for the whole page.
    candidates = candidate_store.get_candidates_by_ids(db, {it.candidate_id for it in rows})
    data = [interview_view(it, candidates.get(it.candidate_id)) for it in rows]
    return InterviewPage(data=data, total=total)


@router.post("/{interview_id}/feedback", response_model=InterviewOut)
def set_feedback(
    interview_id: str,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user=Depends(hr_only),
):
    req = validate_request(FEEDBACK_RULES, FeedbackUpdate, body=payload, params={"id": interview_id})

    interview = interview_store.get_interview(db, req.interview_id)
    if not interview:
        raise NotFoundError(get_error_message("interview_not_found"))

    interview = interview_store.replace_feedback(db, interview, rating=req.rating, notes=req.notes)
    return interview_out(interview)
