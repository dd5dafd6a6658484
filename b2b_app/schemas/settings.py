from typing import Optional

from pydantic import BaseModel, Field


class AppSettingsResponse(BaseModel):
    approval_required: bool
    auto_approve_orders: bool
    min_order_value: float
    notification_email: str
    terms_and_conditions: str


class AppSettingsUpdate(BaseModel):
    approval_required: Optional[bool] = None
    auto_approve_orders: Optional[bool] = None
    min_order_value: Optional[float] = Field(default=None, ge=0)
    notification_email: Optional[str] = None
    terms_and_conditions: Optional[str] = None


class DashboardStats(BaseModel):
    total_customers: int
    pending_customers: int
    approved_customers: int
    customer_groups: int
    active_pricing_rules: int
    pending_orders: int
    pending_quotes: int
