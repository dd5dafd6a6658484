from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from datetime import datetime

from b2b_app.enums.statuses import RuleType, AppliesTo


class PricingRuleBase(BaseModel):
    name: str
    type: RuleType
    value: float
    applies_to: AppliesTo = AppliesTo.all
    product_ids: List[Union[int, str]] = []
    collection_ids: List[Union[int, str]] = []
    customer_group_id: Optional[int] = None
    customer_id: Optional[int] = None
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    priority: int = 0
    active: bool = True


class PricingRuleCreate(PricingRuleBase):
    pass


class PricingRuleUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[RuleType] = None
    value: Optional[float] = None
    applies_to: Optional[AppliesTo] = None
    product_ids: Optional[List[Union[int, str]]] = None
    collection_ids: Optional[List[Union[int, str]]] = None
    customer_group_id: Optional[int] = None
    customer_id: Optional[int] = None
    min_quantity: Optional[int] = Field(default=None, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    priority: Optional[int] = None
    active: Optional[bool] = None

    @field_validator(
        "name", "type", "value", "applies_to", "product_ids", "collection_ids",
        "min_quantity", "priority", "active",
    )
    @classmethod
    def reject_null(cls, v):
        # omit a field to leave it unchanged; null would clear a required column
        if v is None:
            raise ValueError("may not be null")
        return v


class PricingRuleResponse(PricingRuleBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PricingRuleToggleResponse(BaseModel):
    id: int
    active: bool
