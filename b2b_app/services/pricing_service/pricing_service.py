from sqlalchemy.orm import Session

from b2b_app.core.logging import get_logger
from b2b_app.models.pricing_rule import PricingRule
from b2b_app.schemas.pricing_rule import PricingRuleCreate, PricingRuleUpdate

logger = get_logger(__name__)


def create_pricing_rule(db: Session, rule: PricingRuleCreate):
    db_rule = PricingRule(**rule.model_dump(mode="json", exclude={"start_date", "end_date"}))
    db_rule.start_date = rule.start_date
    db_rule.end_date = rule.end_date
    db.add(db_rule)
    db.commit()
    db.refresh(db_rule)
    logger.info("pricing_rule_created", rule_id=db_rule.id, rule_type=db_rule.type, value=db_rule.value)
    return db_rule

def get_pricing_rules(db: Session, skip: int = 0, limit: int = 100):
    return (
        db.query(PricingRule)
        .order_by(PricingRule.priority.desc(), PricingRule.id)
        .offset(skip)
        .limit(limit)
        .all()
    )

def get_pricing_rule(db: Session, rule_id: int):
    return db.query(PricingRule).filter(PricingRule.id == rule_id).first()

def update_pricing_rule(db: Session, rule_id: int, rule_update: PricingRuleUpdate):
    db_rule = get_pricing_rule(db, rule_id)
    if not db_rule:
        return None

    for key, value in rule_update.model_dump(exclude_unset=True).items():
        if key in ("type", "applies_to") and value is not None:
            value = value.value
        setattr(db_rule, key, value)

    db.commit()
    db.refresh(db_rule)
    return db_rule

def delete_pricing_rule(db: Session, rule_id: int) -> bool:
    db_rule = get_pricing_rule(db, rule_id)
    if not db_rule:
        return False
    db.delete(db_rule)
    db.commit()
    logger.info("pricing_rule_deleted", rule_id=rule_id)
    return True

def toggle_pricing_rule(db: Session, rule_id: int):
    db_rule = get_pricing_rule(db, rule_id)
    if not db_rule:
        return None
    db_rule.active = not db_rule.active
    db.commit()
    db.refresh(db_rule)
    logger.info("pricing_rule_toggled", rule_id=rule_id, active=db_rule.active)
    return db_rule
