from fastapi import Depends, Request

from ..config import Settings
from ..services.auth_service import authenticate


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(request: Request, settings: Settings = Depends(get_settings)) -> dict:
    """Claims of a valid bearer token, whatever its role."""
    return authenticate(request.headers.get("Authorization"), settings, required_role=None)
