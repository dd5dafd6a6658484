from typing import Optional

from fastapi import APIRouter, Depends, Request

from b2b_app.dependencies.store import get_rule_store
from b2b_app.routes.pricing.calculate_price import price_line
from b2b_app.schemas.pricing import (
    CartValidationRequest,
    CartValidationResponse,
    CustomerStatusResponse,
    PriceCalculationRequest,
    PriceCalculationResponse,
)
from b2b_app.services.order_validation import is_b2b, validate_customer_cart
from b2b_app.services.rule_store import RuleStore

# Public endpoints called by the storefront script; no session token.
router = APIRouter(prefix="/storefront", tags=["Storefront"])


@router.get("/customer-status", response_model=CustomerStatusResponse)
def customer_status(
    email: Optional[str] = None,
    store: RuleStore = Depends(get_rule_store),
):
    customer = store.find_customer_by_email(email) if email else None
    if not is_b2b(customer):
        return {"is_b2b": False}
    return {"is_b2b": True, "customer": customer}


@router.post("/calculate-price", response_model=PriceCalculationResponse)
def calculate_price(
    body: PriceCalculationRequest,
    request: Request,
    store: RuleStore = Depends(get_rule_store),
):
    result, _ = price_line(request, store, body)
    return result


@router.post("/validate-cart", response_model=CartValidationResponse)
def validate_cart(
    body: CartValidationRequest,
    store: RuleStore = Depends(get_rule_store),
):
    result, customer = validate_customer_cart(store, body.customer_email, body.total_amount)

    if not is_b2b(customer):
        return {"valid": result["valid"], "is_b2b": False, "errors": result["errors"]}

    return {
        "valid": result["valid"],
        "is_b2b": True,
        "errors": result["errors"],
        "minimum_order_value": customer.minimum_order_value,
        "maximum_order_value": customer.maximum_order_value,
    }
