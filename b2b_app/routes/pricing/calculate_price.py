from time import perf_counter
from typing import Any, Dict, Tuple

from fastapi import APIRouter, Depends, Request

from b2b_app.core.config import settings
from b2b_app.core.logging import get_logger
from b2b_app.dependencies.auth import require_admin
from b2b_app.dependencies.store import get_rule_store
from b2b_app.schemas.pricing import PriceCalculationRequest, PricePreviewResponse
from b2b_app.services.pricing_service.calculate_price import calculate_customer_price
from b2b_app.services.rule_store import RuleStore

logger = get_logger(__name__)

router = APIRouter(prefix="/pricing-rules", tags=["Pricing & Calculation"])


def price_line(request: Request, store: RuleStore, body: PriceCalculationRequest) -> Tuple[Dict[str, Any], Any]:
    """Run one price calculation, timing it and updating the in-process counters."""
    start = perf_counter()
    result, customer = calculate_customer_price(
        store,
        customer_email=body.customer_email,
        quantity=body.quantity,
        original_price=body.original_price,
    )
    duration_ms = (perf_counter() - start) * 1000.0

    metrics = getattr(request.app.state, "metrics", None)
    if metrics is not None:
        metrics["price_calculations"] = metrics.get("price_calculations", 0) + 1

    if duration_ms > settings.SLOW_CALCULATION_MS:
        if metrics is not None:
            metrics["slow_price_calculations"] = metrics.get("slow_price_calculations", 0) + 1
        logger.warning(
            "slow_price_calculation",
            product_id=body.product_id,
            quantity=body.quantity,
            duration_ms=round(duration_ms, 2),
        )

    return result, customer


@router.post(
    "/calculate",
    response_model=PricePreviewResponse,
    dependencies=[Depends(require_admin)],
)
def calculate_price(
    body: PriceCalculationRequest,
    request: Request,
    store: RuleStore = Depends(get_rule_store),
):
    """
    Admin price preview: same resolution as the storefront, plus a summary
    of the customer the price was computed for.
    """
    result, customer = price_line(request, store, body)

    if result["b2b_customer"]:
        result["customer"] = {
            "id": customer.id,
            "company_name": customer.company_name,
            "group": customer.group_id,
        }
    return result
