from sqlalchemy import Column, Integer, String

from ..database import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)  # always lowercase
    password = Column(String(255), nullable=False)  # store hashed password
    role = Column(String(50), nullable=False, default="hr")
