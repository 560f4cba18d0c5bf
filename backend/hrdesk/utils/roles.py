from fastapi import Depends

from .dependencies import get_current_user
from .error_handlers import ForbiddenError, get_error_message


def _role_required(required_role: str):
    def check_role(user=Depends(get_current_user)):
        if user.get("role") != required_role:
            raise ForbiddenError(get_error_message("forbidden"))
        return user
    return check_role


hr_only = _role_required("hr")
