from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime

from b2b_app.database.connection import Base


class B2BOrder(Base):
    __tablename__ = "b2b_orders"

    id = Column(Integer, primary_key=True, index=True)
    shopify_order_id = Column(String, unique=True, nullable=True)
    order_number = Column(String, nullable=True)
    customer_id = Column(Integer, nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    approval_status = Column(String, default="pending", index=True)
    rejection_reason = Column(String, nullable=True)
    approved_by = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
