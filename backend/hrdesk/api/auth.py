from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..schemas.auth import LoginRequest, SignupRequest, TokenResponse
from ..services import auth_service
from ..utils.dependencies import get_settings
from ..utils.validation import body, not_empty, validate_email, validate_password, validate_request

router = APIRouter(prefix="/auth", tags=["Auth"])

SIGNUP_RULES = [
    body("name", not_empty("Name required")),
    body("email", validate_email),
    body("password", validate_password),
]

LOGIN_RULES = [
    body("email", validate_email),
    body("password", not_empty("Password required", strip=False)),
]


@router.post("/signup", response_model=TokenResponse)
def signup(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    req = validate_request(SIGNUP_RULES, SignupRequest, body=payload)
    token = auth_service.signup(db, settings, name=req.name, email=req.email, password=req.password)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    req = validate_request(LOGIN_RULES, LoginRequest, body=payload)
    token = auth_service.login(db, settings, email=req.email, password=req.password)
    return TokenResponse(token=token)
