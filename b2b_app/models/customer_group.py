from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean

from b2b_app.database.connection import Base


class CustomerGroup(Base):
    __tablename__ = "customer_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    discount_percentage = Column(Float, default=0.0)
    minimum_order_value = Column(Float, nullable=True)
    maximum_order_value = Column(Float, nullable=True)
    payment_terms = Column(String, default="immediate")
    auto_approve = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
