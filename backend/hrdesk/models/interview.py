from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from ..database import Base, TimestampMixin


class Interview(TimestampMixin, Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)  # stored in UTC
    interviewer = Column(String(120), nullable=False)
    mode = Column(String(32), nullable=False, default="remote")  # onsite | remote
    # {"rating": float?, "notes": str?}; replaced wholesale on every update.
    feedback = Column(JSON, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
