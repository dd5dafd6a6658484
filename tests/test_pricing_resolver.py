from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from b2b_app.core.exceptions import ValidationError
from b2b_app.services.pricing_service.calculate_price import (
    BASELINE_RULE_NAME,
    is_rule_eligible,
    resolve_price,
)

NOW = datetime(2026, 3, 15, 12, 0, 0)


def _customer(discount=15.0, status="approved", id=1, group_id=None):
    return SimpleNamespace(id=id, status=status, group_id=group_id, discount_percentage=discount)


_rule_ids = iter(range(1, 10_000))


def _rule(name="Rule", type="percentage", value=20.0, priority=0, **overrides):
    fields = dict(
        id=next(_rule_ids),
        name=name,
        type=type,
        value=value,
        priority=priority,
        active=True,
        customer_id=None,
        customer_group_id=None,
        min_quantity=1,
        max_quantity=None,
        start_date=None,
        end_date=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


# ---------- non-B2B path ----------

@pytest.mark.parametrize("customer", [None, _customer(status="pending"), _customer(status="rejected")])
def test_non_b2b_customers_pay_full_price(customer):
    rules = [_rule(value=50.0)]
    res = resolve_price(customer, rules, 3, 120.0, now=NOW)

    assert res["b2b_customer"] is False
    assert res["final_price"] == 120.0
    assert res["original_price"] == 120.0
    assert res["discount"] == 0
    assert res["discount_amount"] == 0
    assert res["applied_rule"] is None


# ---------- concrete scenarios ----------

def test_baseline_discount_only():
    res = resolve_price(_customer(discount=15.0), [], 1, 100.0, now=NOW)

    assert res["b2b_customer"] is True
    assert res["final_price"] == pytest.approx(85.00)
    assert res["discount"] == 15
    assert res["discount_amount"] == pytest.approx(15.00)
    assert res["applied_rule"] == BASELINE_RULE_NAME


def test_larger_percentage_rule_beats_baseline():
    rule = _rule(name="Spring wholesale", value=20.0, priority=0)
    res = resolve_price(_customer(discount=15.0), [rule], 1, 100.0, now=NOW)

    assert res["final_price"] == pytest.approx(80.00)
    assert res["discount"] == 20
    assert res["applied_rule"] == "Spring wholesale"


def test_smaller_rule_does_not_replace_baseline():
    res = resolve_price(_customer(discount=15.0), [_rule(value=5.0, priority=3)], 1, 100.0, now=NOW)

    assert res["discount"] == 15
    assert res["applied_rule"] == BASELINE_RULE_NAME


def test_fixed_discount_expressed_as_percentage_of_line_price():
    rule = _rule(name="Ten off", type="fixed_discount", value=10.0)
    res = resolve_price(_customer(discount=0), [rule], 1, 50.0, now=NOW)

    assert res["discount"] == pytest.approx(20.0)
    assert res["final_price"] == pytest.approx(40.00)
    assert res["applied_rule"] == "Ten off"


def test_fixed_discount_on_free_item_contributes_nothing():
    rule = _rule(type="fixed_discount", value=10.0)
    res = resolve_price(_customer(discount=0), [rule], 1, 0.0, now=NOW)

    assert res["final_price"] == 0.0
    assert res["discount"] == 0.0


def test_fixed_price_rules_are_not_applied():
    rule = _rule(name="Flat 5", type="fixed_price", value=5.0, priority=10)
    res = resolve_price(_customer(discount=0), [rule], 1, 50.0, now=NOW)

    assert res["final_price"] == 50.0
    assert res["discount"] == 0
    assert res["applied_rule"] == BASELINE_RULE_NAME


def test_missing_baseline_counts_as_zero():
    res = resolve_price(_customer(discount=None), [], 1, 40.0, now=NOW)

    assert res["b2b_customer"] is True
    assert res["final_price"] == 40.0
    assert res["discount"] == 0


# ---------- tie-break ----------

@pytest.mark.parametrize("reverse", [False, True])
def test_equal_discount_positive_priority_wins_regardless_of_order(reverse):
    plain = _rule(name="Plain 15", value=15.0, priority=0)
    preferred = _rule(name="Preferred 15", value=15.0, priority=1)
    rules = [plain, preferred]
    if reverse:
        rules.reverse()

    res = resolve_price(_customer(discount=10.0), rules, 1, 100.0, now=NOW)

    assert res["applied_rule"] == "Preferred 15"
    assert res["final_price"] == pytest.approx(85.00)


def test_equal_to_baseline_needs_positive_priority():
    zero = resolve_price(_customer(discount=15.0), [_rule(name="Zero", value=15.0, priority=0)], 1, 100.0, now=NOW)
    positive = resolve_price(_customer(discount=15.0), [_rule(name="Pos", value=15.0, priority=2)], 1, 100.0, now=NOW)

    assert zero["applied_rule"] == BASELINE_RULE_NAME
    assert positive["applied_rule"] == "Pos"
    assert zero["final_price"] == positive["final_price"] == pytest.approx(85.00)


# ---------- eligibility window ----------

def test_min_quantity_boundary():
    rule = _rule(name="Bulk", value=25.0, min_quantity=10)
    customer = _customer(discount=0)

    assert resolve_price(customer, [rule], 9, 100.0, now=NOW)["applied_rule"] == BASELINE_RULE_NAME
    assert resolve_price(customer, [rule], 10, 100.0, now=NOW)["applied_rule"] == "Bulk"


def test_max_quantity_boundary():
    rule = _rule(name="Small lots", value=5.0, max_quantity=20)
    customer = _customer(discount=0)

    assert resolve_price(customer, [rule], 20, 100.0, now=NOW)["applied_rule"] == "Small lots"
    assert resolve_price(customer, [rule], 21, 100.0, now=NOW)["applied_rule"] == BASELINE_RULE_NAME


def test_end_date_boundary():
    customer = _customer(discount=0)
    expired = _rule(name="Expired", end_date=NOW - timedelta(days=1))
    running = _rule(name="Running", end_date=NOW + timedelta(days=1))

    assert resolve_price(customer, [expired], 1, 100.0, now=NOW)["applied_rule"] == BASELINE_RULE_NAME
    assert resolve_price(customer, [running], 1, 100.0, now=NOW)["applied_rule"] == "Running"


def test_start_date_in_future_is_ineligible():
    rule = _rule(start_date=NOW + timedelta(hours=1))
    assert not is_rule_eligible(rule, _customer(), 1, NOW)
    assert is_rule_eligible(rule, _customer(), 1, NOW + timedelta(hours=2))


def test_timezone_aware_dates_are_compared_in_utc():
    rule = _rule(end_date=datetime(2026, 3, 15, 13, 0, tzinfo=timezone.utc))
    aware_now = datetime(2026, 3, 15, 13, 30, tzinfo=timezone(timedelta(hours=1)))  # 12:30 UTC

    res = resolve_price(_customer(discount=0), [rule], 1, 100.0, now=aware_now)
    assert res["applied_rule"] == "Rule"


def test_customer_and_group_targeting():
    customer = _customer(id=7, group_id=3, discount=0)

    assert is_rule_eligible(_rule(customer_id=7), customer, 1, NOW)
    assert not is_rule_eligible(_rule(customer_id=8), customer, 1, NOW)
    assert is_rule_eligible(_rule(customer_group_id=3), customer, 1, NOW)
    assert not is_rule_eligible(_rule(customer_group_id=4), customer, 1, NOW)
    assert not is_rule_eligible(_rule(customer_id=7, customer_group_id=4), customer, 1, NOW)


def test_group_rule_skipped_for_customer_without_group():
    customer = _customer(group_id=None, discount=0)
    res = resolve_price(customer, [_rule(customer_group_id=3, value=30.0)], 1, 100.0, now=NOW)
    assert res["discount"] == 0


def test_inactive_rule_is_ignored():
    res = resolve_price(_customer(discount=0), [_rule(value=40.0, active=False)], 1, 100.0, now=NOW)
    assert res["discount"] == 0


# ---------- arithmetic ----------

def test_half_up_rounding_at_cents():
    # 0.25 * 0.5 = 0.125 exactly; half-up gives 0.13 where banker's rounding gives 0.12
    res = resolve_price(_customer(discount=50.0), [], 1, 0.25, now=NOW)
    assert res["final_price"] == 0.13
    assert res["discount_amount"] == 0.13


def test_discount_over_hundred_percent_is_not_clamped():
    rule = _rule(value=120.0)
    res = resolve_price(_customer(discount=0), [rule], 1, 50.0, now=NOW)
    assert res["final_price"] == pytest.approx(-10.00)


@pytest.mark.parametrize(
    "discount,price",
    [(0, 19.99), (12.5, 80.0), (33.0, 7.49), (15.0, 1234.56)],
)
def test_final_price_matches_discount(discount, price):
    res = resolve_price(_customer(discount=discount), [], 1, price, now=NOW)
    expected = round(price * (1 - discount / 100) + 1e-9, 2)
    assert res["final_price"] == pytest.approx(expected)


def test_resolution_is_idempotent():
    customer = _customer(discount=10.0)
    rules = [_rule(value=12.0), _rule(type="fixed_discount", value=3.0, priority=1)]

    first = resolve_price(customer, rules, 4, 25.0, now=NOW)
    second = resolve_price(customer, rules, 4, 25.0, now=NOW)
    assert first == second


def test_quantity_defaults_to_one():
    rule = _rule(name="Needs two", min_quantity=2)
    res = resolve_price(_customer(discount=0), [rule], None, 100.0, now=NOW)
    assert res["applied_rule"] == BASELINE_RULE_NAME


# ---------- validation ----------

@pytest.mark.parametrize("price", [-1.0, float("nan"), float("inf"), "12.50", None, True])
def test_bad_original_price_raises(price):
    with pytest.raises(ValidationError):
        resolve_price(_customer(), [], 1, price, now=NOW)


@pytest.mark.parametrize("quantity", [0, -3, 2.5, "4"])
def test_bad_quantity_raises(quantity):
    with pytest.raises(ValidationError):
        resolve_price(_customer(), [], quantity, 10.0, now=NOW)


def test_malformed_rule_value_fails_whole_calculation():
    rules = [_rule(value=20.0), _rule(name="Broken", value="twenty")]
    with pytest.raises(ValidationError):
        resolve_price(_customer(discount=0), rules, 1, 100.0, now=NOW)


def test_unknown_rule_type_fails():
    with pytest.raises(ValidationError):
        resolve_price(_customer(discount=0), [_rule(type="buy_one_get_one")], 1, 100.0, now=NOW)


def test_ineligible_malformed_rule_is_not_inspected():
    rule = _rule(value="twenty", active=False)
    res = resolve_price(_customer(discount=5.0), [rule], 1, 100.0, now=NOW)
    assert res["discount"] == 5.0
