"""Booked class model definitions."""

from sqlalchemy import JSON, Column, Float, String
from backend.database import Base
from backend.store import new_id


class BookedClass(Base):
    """Represents a student's booking of a class."""
    __tablename__ = "booked_classes"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, index=True)
    class_id = Column(String)  # not a foreign key
    class_name = Column(String)
    image = Column(String)
    instructor_name = Column(String)
    price = Column(Float)
    details = Column(JSON, default=dict)
