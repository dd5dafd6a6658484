from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime

from b2b_app.database.connection import Base


class Customer(Base):
    __tablename__ = "b2b_customers"

    id = Column(Integer, primary_key=True, index=True)
    shopify_customer_id = Column(String, unique=True, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    business_type = Column(String, nullable=True)
    tax_id = Column(String, nullable=True)

    status = Column(String, default="pending", index=True)  # pending / approved / rejected
    rejection_reason = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)

    # plain integer, not a FK: deleting a group leaves this dangling
    group_id = Column(Integer, nullable=True, index=True)

    # snapshot of the group's terms at assignment time, editable per customer
    discount_percentage = Column(Float, default=0.0)
    minimum_order_value = Column(Float, nullable=True)
    maximum_order_value = Column(Float, nullable=True)
    payment_terms = Column(String, default="immediate")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
