from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, EmailStr, Field, model_validator

from b2b_app.enums.statuses import QuoteStatus


class QuoteRequestCreate(BaseModel):
    customer_email: EmailStr
    company_name: Optional[str] = None
    products: List[Union[int, str]] = Field(min_length=1)
    quantities: List[int] = Field(min_length=1)
    message: Optional[str] = None

    @model_validator(mode="after")
    def check_parallel_lists(self):
        if len(self.products) != len(self.quantities):
            raise ValueError("products and quantities must have the same length")
        return self


class QuoteRespond(BaseModel):
    quote_amount: Optional[float] = Field(default=None, ge=0)
    quote_valid_until: Optional[datetime] = None
    quote_notes: Optional[str] = None
    status: QuoteStatus = QuoteStatus.responded


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class QuoteRequestResponse(BaseModel):
    id: int
    customer_id: int
    customer_email: str
    company_name: Optional[str] = None
    products: List[Union[int, str]]
    quantities: List[int]
    message: Optional[str] = None
    status: QuoteStatus
    quote_amount: Optional[float] = None
    quote_valid_until: Optional[datetime] = None
    quote_notes: Optional[str] = None
    responded_by: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class QuoteSubmittedResponse(BaseModel):
    success: bool = True
    id: int
    message: str = "Quote request submitted successfully. We will contact you soon."
