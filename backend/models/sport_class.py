"""Class model definitions."""

from sqlalchemy import JSON, Column, Float, Integer, String, Text
from backend.database import Base
from backend.store import new_id


class SportClass(Base):
    """Represents a class offered by an instructor."""
    __tablename__ = "classes"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String)
    image = Column(String)
    instructor_name = Column(String)
    instructor_email = Column(String, index=True)
    available_seats = Column(Integer)
    price = Column(Float)
    status = Column(String)
    feedback = Column(Text)
    details = Column(JSON, default=dict)
