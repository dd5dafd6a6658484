from sqlalchemy import Column, Integer, String, Float, JSON, Boolean, DateTime
import datetime
from b2b_app.database.connection import Base


class PricingRule(Base):
    __tablename__ = "pricing_rules"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # percentage, fixed_price, fixed_discount
    value = Column(Float, nullable=False)

    applies_to = Column(String, default="all")  # all, products, collections
    product_ids = Column(JSON, default=list)
    collection_ids = Column(JSON, default=list)
    customer_group_id = Column(Integer, nullable=True, index=True)
    customer_id = Column(Integer, nullable=True, index=True)

    min_quantity = Column(Integer, default=1)
    max_quantity = Column(Integer, nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)

    priority = Column(Integer, default=0)
    active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
