"""Payment model definitions."""

from sqlalchemy import JSON, Column, DateTime, Float, String
from backend.database import Base
from backend.store import new_id


class Payment(Base):
    """Represents a payment recorded by the client after checkout."""
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, index=True)
    amount = Column(Float)
    transaction_id = Column(String)
    date = Column(DateTime(timezone=True))
    status = Column(String)
    details = Column(JSON, default=dict)
