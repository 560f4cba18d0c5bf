from .candidate import Candidate
from .interview import Interview
from .user import User

__all__ = ["User", "Candidate", "Interview"]
