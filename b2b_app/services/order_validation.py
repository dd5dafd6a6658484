from typing import Any, Dict, List, Optional

from b2b_app.core.exceptions import ValidationError
from b2b_app.enums.statuses import CustomerStatus
from b2b_app.services.pricing_service.calculate_price import require_number
from b2b_app.services.rule_store import RuleStore


def validate_order(
    customer,
    total_amount: Any,
    global_minimum: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Check an order total against the customer's min/max and the store-wide
    minimum. Every check runs; errors accumulate. Non-B2B customers always pass.
    """
    total = require_number(total_amount, "total_amount")
    if total < 0:
        raise ValidationError("total_amount must not be negative")

    if customer is None or customer.status != CustomerStatus.approved:
        return {"valid": True, "errors": []}

    errors: List[str] = []

    # 0 and None both mean "no bound"
    minimum = customer.minimum_order_value
    if minimum and total < minimum:
        errors.append(f"Minimum order value is ${minimum:.2f}")

    maximum = customer.maximum_order_value
    if maximum and total > maximum:
        errors.append(f"Maximum order value is ${maximum:.2f}")

    if global_minimum and global_minimum > 0 and total < global_minimum:
        errors.append(f"Minimum order value is ${global_minimum:.2f}")

    return {"valid": len(errors) == 0, "errors": errors}


def validate_customer_cart(
    store: RuleStore,
    customer_email: Optional[str],
    total_amount: Any,
):
    """Returns (result, customer) for the cart owner identified by email."""
    customer = store.find_customer_by_email(customer_email) if customer_email else None
    result = validate_order(customer, total_amount, store.get_global_minimum())
    return result, customer


def is_b2b(customer) -> bool:
    return customer is not None and customer.status == CustomerStatus.approved
