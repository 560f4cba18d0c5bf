from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Integer, String, Text

from ..database import Base, TimestampMixin


class Candidate(TimestampMixin, Base):
    __tablename__ = "candidates"
    __table_args__ = (
        CheckConstraint("experience >= 0", name="ck_candidates_experience_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    role = Column(String(255), nullable=False, index=True)  # job title / category
    experience = Column(Float, nullable=False)  # years
    rating = Column(Float, nullable=False, default=0)
    notes = Column(Text, nullable=False, default="")
    # Audit only; not used for access control.
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
