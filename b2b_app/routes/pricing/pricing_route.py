from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from b2b_app.database.connection import get_db
from b2b_app.schemas.pricing_rule import (
    PricingRuleCreate, PricingRuleUpdate, PricingRuleResponse, PricingRuleToggleResponse
)
from b2b_app.services.pricing_service.pricing_service import (
    create_pricing_rule, get_pricing_rules, get_pricing_rule,
    update_pricing_rule, delete_pricing_rule, toggle_pricing_rule
)
from b2b_app.dependencies.auth import require_admin


router = APIRouter(prefix="/pricing-rules", tags=["Pricing Rules"], dependencies=[Depends(require_admin)])

@router.post("/", response_model=PricingRuleResponse)
def create_rule(rule: PricingRuleCreate, db: Session = Depends(get_db)):
    return create_pricing_rule(db, rule)

@router.get("/", response_model=list[PricingRuleResponse])
def list_rules(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return get_pricing_rules(db, skip=skip, limit=limit)

@router.get("/{rule_id}", response_model=PricingRuleResponse)
def get_rule(rule_id: int, db: Session = Depends(get_db)):
    rule = get_pricing_rule(db, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Pricing rule not found")
    return rule

@router.put("/{rule_id}", response_model=PricingRuleResponse)
def update_rule(rule_id: int, rule: PricingRuleUpdate, db: Session = Depends(get_db)):
    updated = update_pricing_rule(db, rule_id, rule)
    if not updated:
        raise HTTPException(status_code=404, detail="Pricing rule not found")
    return updated

@router.delete("/{rule_id}")
def delete_rule(rule_id: int, db: Session = Depends(get_db)):
    if not delete_pricing_rule(db, rule_id):
        raise HTTPException(status_code=404, detail="Pricing rule not found")
    return {"success": True, "message": "Pricing rule deleted successfully"}

@router.patch("/{rule_id}/toggle", response_model=PricingRuleToggleResponse)
def toggle_rule(rule_id: int, db: Session = Depends(get_db)):
    rule = toggle_pricing_rule(db, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Pricing rule not found")
    return {"id": rule.id, "active": rule.active}
