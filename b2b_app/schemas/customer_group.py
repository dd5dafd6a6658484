from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CustomerGroupBase(BaseModel):
    name: str
    description: Optional[str] = None
    discount_percentage: float = Field(default=0.0, ge=0)
    minimum_order_value: Optional[float] = Field(default=None, ge=0)
    maximum_order_value: Optional[float] = Field(default=None, ge=0)
    payment_terms: str = "immediate"
    auto_approve: bool = False


class CustomerGroupCreate(CustomerGroupBase):
    pass


class CustomerGroupUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    discount_percentage: Optional[float] = Field(default=None, ge=0)
    minimum_order_value: Optional[float] = Field(default=None, ge=0)
    maximum_order_value: Optional[float] = Field(default=None, ge=0)
    payment_terms: Optional[str] = None
    auto_approve: Optional[bool] = None

    @field_validator("name", "discount_percentage", "payment_terms", "auto_approve")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class CustomerGroupResponse(CustomerGroupBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
