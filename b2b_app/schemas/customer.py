from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from b2b_app.enums.statuses import CustomerStatus


class CustomerSignup(BaseModel):
    email: EmailStr
    first_name: str
    last_name: str
    company_name: str
    phone: Optional[str] = None
    business_type: Optional[str] = None
    tax_id: Optional[str] = None
    shopify_customer_id: Optional[str] = None


class CustomerUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    discount_percentage: Optional[float] = Field(default=None, ge=0)
    minimum_order_value: Optional[float] = Field(default=None, ge=0)
    maximum_order_value: Optional[float] = Field(default=None, ge=0)
    payment_terms: Optional[str] = None


class CustomerReject(BaseModel):
    reason: Optional[str] = None


class CustomerGroupAssign(BaseModel):
    group_id: int


class CustomerResponse(BaseModel):
    id: int
    shopify_customer_id: Optional[str] = None
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    business_type: Optional[str] = None
    tax_id: Optional[str] = None
    status: CustomerStatus
    rejection_reason: Optional[str] = None
    group_id: Optional[int] = None
    discount_percentage: Optional[float] = None
    minimum_order_value: Optional[float] = None
    maximum_order_value: Optional[float] = None
    payment_terms: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CustomerListItem(BaseModel):
    id: int
    name: str
    email: str
    group_name: str
    status: CustomerStatus
    created_at: datetime
