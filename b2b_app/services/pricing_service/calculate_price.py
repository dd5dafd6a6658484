import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from numbers import Number
from typing import Any, Dict, Iterable, Optional, Tuple

from b2b_app.core.exceptions import ValidationError
from b2b_app.core.logging import get_logger
from b2b_app.enums.statuses import CustomerStatus, RuleType
from b2b_app.services.rule_store import RuleStore

logger = get_logger(__name__)

BASELINE_RULE_NAME = "Customer group discount"

_CENT = Decimal("0.01")


# ===================== NUMERIC HELPERS =====================


def require_number(value: Any, field: str) -> float:
    """Return `value` as a finite float or raise ValidationError. Never coerces strings."""
    if isinstance(value, bool) or not isinstance(value, Number):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def _round_currency(amount: float) -> float:
    """Half-up rounding to the currency minor unit: 2.675 -> 2.68."""
    return float(Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP))


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # rule dates come back naive from the store; compare everything as naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _validate_line(quantity: Optional[int], original_price: Any) -> Tuple[int, float]:
    price = require_number(original_price, "original_price")
    if price < 0:
        raise ValidationError("original_price must not be negative")

    if quantity is None:
        return 1, price
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"quantity must be an integer, got {quantity!r}")
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    return quantity, price


# ===================== RULE ELIGIBILITY =====================


def is_rule_eligible(rule, customer, quantity: int, now: datetime) -> bool:
    """
    A rule applies when it is active, targets this customer (or nobody in
    particular), targets the customer's group (or none), and the purchase falls
    inside its quantity and date window.
    """
    if not rule.active:
        return False

    if rule.customer_id and rule.customer_id != customer.id:
        return False
    if rule.customer_group_id and rule.customer_group_id != customer.group_id:
        return False

    min_q = rule.min_quantity or 1
    if quantity < min_q:
        return False
    if rule.max_quantity is not None and quantity > rule.max_quantity:
        return False

    start_date = _naive_utc(rule.start_date)
    end_date = _naive_utc(rule.end_date)
    if start_date is not None and start_date > now:
        return False
    if end_date is not None and end_date < now:
        return False

    return True


def _rule_discount(rule, original_price: float) -> Optional[float]:
    """
    Percentage-equivalent of a rule for this line, or None when the rule type
    has no percentage path (fixed_price).
    """
    value = require_number(rule.value, f"value of pricing rule {rule.name!r}")

    if rule.type == RuleType.percentage:
        return value

    if rule.type == RuleType.fixed_discount:
        if original_price == 0:
            return 0.0
        return (value / original_price) * 100.0

    if rule.type == RuleType.fixed_price:
        return None

    raise ValidationError(f"Unknown pricing rule type {rule.type!r}")


# ===================== RESOLVER =====================


def resolve_price(
    customer,
    candidate_rules: Iterable,
    quantity: Optional[int],
    original_price: Any,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Pick the single discount for one line.

    Business rules:
    - Only approved customers get B2B pricing; anyone else pays original_price.
    - The customer's own discount_percentage is the baseline.
    - An eligible rule replaces the current best when its discount is strictly
      larger, or exactly equal and its priority is positive.
    - Prices are rounded half-up to cents and never clamped at zero.
    """
    quantity, price = _validate_line(quantity, original_price)

    if customer is None or customer.status != CustomerStatus.approved:
        return {
            "b2b_customer": False,
            "original_price": price,
            "final_price": price,
            "discount": 0.0,
            "discount_amount": 0.0,
            "applied_rule": None,
        }

    now = _naive_utc(now) if now is not None else datetime.utcnow()

    baseline = customer.discount_percentage
    best_discount = 0.0 if baseline is None else require_number(baseline, "discount_percentage")
    applied_rule = BASELINE_RULE_NAME

    for rule in candidate_rules:
        if not is_rule_eligible(rule, customer, quantity, now):
            continue

        discount = _rule_discount(rule, price)
        if discount is None:
            logger.debug("fixed_price_rule_skipped", rule_id=rule.id, rule_name=rule.name)
            continue

        priority = rule.priority or 0
        if discount > best_discount or (discount == best_discount and priority > 0):
            best_discount = discount
            applied_rule = rule.name

    unrounded_final = price * (1.0 - best_discount / 100.0)

    return {
        "b2b_customer": True,
        "original_price": price,
        "final_price": _round_currency(unrounded_final),
        "discount": best_discount,
        "discount_amount": _round_currency(price - unrounded_final),
        "applied_rule": applied_rule,
    }


def calculate_customer_price(
    store: RuleStore,
    customer_email: Optional[str],
    quantity: Optional[int],
    original_price: Any,
    now: Optional[datetime] = None,
):
    """
    Look up the customer and the active rules, then resolve the price.
    Returns (result, customer); customer is None for unknown emails.
    """
    customer = store.find_customer_by_email(customer_email) if customer_email else None

    rules = []
    if customer is not None and customer.status == CustomerStatus.approved:
        rules = store.list_active_rules()
        if customer.group_id and store.get_group(customer.group_id) is None:
            # group was deleted: the customer prices as if ungrouped
            logger.debug("orphaned_customer_group", customer_id=customer.id, group_id=customer.group_id)
            rules = [rule for rule in rules if not rule.customer_group_id]

    result = resolve_price(customer, rules, quantity, original_price, now=now)
    return result, customer
