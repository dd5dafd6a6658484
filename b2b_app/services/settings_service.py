from typing import Dict, Optional

from sqlalchemy.orm import Session

from b2b_app.core.logging import get_logger
from b2b_app.models.app_setting import AppSetting
from b2b_app.models.customer import Customer
from b2b_app.models.customer_group import CustomerGroup
from b2b_app.models.order import B2BOrder
from b2b_app.models.pricing_rule import PricingRule
from b2b_app.models.quote_request import QuoteRequest
from b2b_app.schemas.settings import AppSettingsResponse, AppSettingsUpdate, DashboardStats

logger = get_logger(__name__)

DEFAULT_SETTINGS: Dict[str, str] = {
    "approval_required": "true",
    "auto_approve_orders": "false",
    "min_order_value": "0",
    "notification_email": "",
    "terms_and_conditions": "",
}


def get_setting(db: Session, key: str) -> Optional[str]:
    row = db.query(AppSetting).filter(AppSetting.key == key).first()
    return row.value if row else None


def set_setting(db: Session, key: str, value: str) -> None:
    row = db.query(AppSetting).filter(AppSetting.key == key).first()
    if row is None:
        db.add(AppSetting(key=key, value=value))
    else:
        row.value = value


def _as_float(value: Optional[str]) -> float:
    try:
        return float(value) if value else 0.0
    except ValueError:
        return 0.0


def get_app_settings(db: Session) -> AppSettingsResponse:
    return AppSettingsResponse(
        approval_required=get_setting(db, "approval_required") == "true",
        auto_approve_orders=get_setting(db, "auto_approve_orders") == "true",
        min_order_value=_as_float(get_setting(db, "min_order_value")),
        notification_email=get_setting(db, "notification_email") or "",
        terms_and_conditions=get_setting(db, "terms_and_conditions") or "",
    )


def update_app_settings(db: Session, data: AppSettingsUpdate) -> AppSettingsResponse:
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        set_setting(db, key, str(value))
    db.commit()
    logger.info("settings_updated", keys=sorted(data.model_dump(exclude_unset=True)))
    return get_app_settings(db)


def seed_default_settings(db: Session) -> None:
    for key, value in DEFAULT_SETTINGS.items():
        if get_setting(db, key) is None:
            db.add(AppSetting(key=key, value=value))
    db.commit()


def get_dashboard_stats(db: Session) -> DashboardStats:
    return DashboardStats(
        total_customers=db.query(Customer).count(),
        pending_customers=db.query(Customer).filter(Customer.status == "pending").count(),
        approved_customers=db.query(Customer).filter(Customer.status == "approved").count(),
        customer_groups=db.query(CustomerGroup).count(),
        active_pricing_rules=db.query(PricingRule).filter(PricingRule.active.is_(True)).count(),
        pending_orders=db.query(B2BOrder).filter(B2BOrder.approval_status == "pending").count(),
        pending_quotes=db.query(QuoteRequest).filter(QuoteRequest.status == "pending").count(),
    )
