from typing import List, Optional, Union

from pydantic import BaseModel, Field


# ---------- Price calculation ----------

class PriceCalculationRequest(BaseModel):
    customer_email: Optional[str] = None
    product_id: Optional[Union[int, str]] = None
    variant_id: Optional[Union[int, str]] = None
    quantity: Optional[int] = Field(default=None, strict=True)
    original_price: float = Field(strict=True)


class CustomerSummary(BaseModel):
    id: int
    company_name: Optional[str] = None
    group: Optional[int] = None


class PriceCalculationResponse(BaseModel):
    b2b_customer: bool
    original_price: float
    final_price: float
    discount: float
    discount_amount: float
    applied_rule: Optional[str] = None


class PricePreviewResponse(PriceCalculationResponse):
    customer: Optional[CustomerSummary] = None


# ---------- Cart / order validation ----------

class CartValidationRequest(BaseModel):
    customer_email: Optional[str] = None
    total_amount: float = Field(strict=True)


class CartValidationResponse(BaseModel):
    valid: bool
    is_b2b: bool
    errors: List[str] = []
    minimum_order_value: Optional[float] = None
    maximum_order_value: Optional[float] = None


# ---------- Storefront customer status ----------

class StorefrontCustomer(BaseModel):
    id: int
    company_name: Optional[str] = None
    discount_percentage: Optional[float] = None
    minimum_order_value: Optional[float] = None
    maximum_order_value: Optional[float] = None
    group_id: Optional[int] = None

    class Config:
        from_attributes = True


class CustomerStatusResponse(BaseModel):
    is_b2b: bool
    customer: Optional[StorefrontCustomer] = None
