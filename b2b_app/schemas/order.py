from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from b2b_app.enums.statuses import OrderApprovalStatus


class OrderCreate(BaseModel):
    customer_email: str
    total_amount: float = Field(strict=True)
    shopify_order_id: Optional[str] = None
    order_number: Optional[str] = None


class OrderReject(BaseModel):
    reason: Optional[str] = None


class OrderResponse(BaseModel):
    id: int
    shopify_order_id: Optional[str] = None
    order_number: Optional[str] = None
    customer_id: int
    total_amount: float
    approval_status: OrderApprovalStatus
    rejection_reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class OrderDetailResponse(OrderResponse):
    email: Optional[str] = None
    company_name: Optional[str] = None


class OrderRecordedResponse(BaseModel):
    order: OrderResponse
    valid: bool
    errors: List[str] = []
