from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, JSON

from b2b_app.database.connection import Base


class QuoteRequest(Base):
    __tablename__ = "quote_requests"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, default=0, index=True)  # 0 = not a known customer
    customer_email = Column(String, nullable=False, index=True)
    company_name = Column(String, default="")
    # parallel lists, same length
    products = Column(JSON, default=list)
    quantities = Column(JSON, default=list)
    message = Column(String, default="")
    status = Column(String, default="pending", index=True)

    quote_amount = Column(Float, nullable=True)
    quote_valid_until = Column(DateTime, nullable=True)
    quote_notes = Column(String, default="")
    responded_by = Column(String, nullable=True)
    responded_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
