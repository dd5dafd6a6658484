from typing import List, Optional

from sqlalchemy.orm import Session

from b2b_app.models.app_setting import AppSetting
from b2b_app.models.customer import Customer
from b2b_app.models.customer_group import CustomerGroup
from b2b_app.models.pricing_rule import PricingRule

GLOBAL_MINIMUM_SETTING = "min_order_value"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class RuleStore:
    """
    Read-only lookups the pricing resolver and order validator need.
    Built per request around that request's session.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_customer_by_email(self, email: str) -> Optional[Customer]:
        if not email:
            return None
        return (
            self.db.query(Customer)
            .filter(Customer.email == normalize_email(email))
            .first()
        )

    def list_active_rules(self) -> List[PricingRule]:
        return self.db.query(PricingRule).filter(PricingRule.active.is_(True)).all()

    def get_group(self, group_id: Optional[int]) -> Optional[CustomerGroup]:
        if not group_id:
            return None
        return self.db.query(CustomerGroup).filter(CustomerGroup.id == group_id).first()

    def get_global_minimum(self) -> float:
        row = self.db.query(AppSetting).filter(AppSetting.key == GLOBAL_MINIMUM_SETTING).first()
        if row is None or not row.value:
            return 0.0
        try:
            return float(row.value)
        except ValueError:
            return 0.0
