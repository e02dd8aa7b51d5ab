"""User model definitions."""

from sqlalchemy import JSON, Column, String
from backend.database import Base
from backend.store import new_id

ROLE_STUDENT = "student"
ROLE_INSTRUCTOR = "instructor"
ROLE_ADMIN = "admin"


class User(Base):
    """Represents a registered user."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, index=True)
    name = Column(String)
    photo = Column(String)
    role = Column(String)  # None/student/instructor/admin
    details = Column(JSON, default=dict)
