from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from b2b_app.core.logging import get_logger
from b2b_app.models.customer_group import CustomerGroup
from b2b_app.schemas.customer_group import CustomerGroupCreate, CustomerGroupUpdate

logger = get_logger(__name__)

DEFAULT_GROUP = {
    "name": "Default B2B",
    "description": "Standard wholesale terms",
    "discount_percentage": 15.0,
    "minimum_order_value": 100.0,
    "payment_terms": "immediate",
    "auto_approve": False,
}


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[int] = None):
    query = db.query(CustomerGroup).filter(CustomerGroup.name == name)
    if exclude_id is not None:
        query = query.filter(CustomerGroup.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Group name already exists")


def create_group(db: Session, data: CustomerGroupCreate) -> CustomerGroup:
    _ensure_unique_name(db, data.name)
    group = CustomerGroup(**data.model_dump())
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("customer_group_created", group_id=group.id, name=group.name)
    return group


def list_groups(db: Session) -> List[CustomerGroup]:
    return db.query(CustomerGroup).order_by(CustomerGroup.name).all()


def get_group(db: Session, group_id: int) -> Optional[CustomerGroup]:
    return db.query(CustomerGroup).filter(CustomerGroup.id == group_id).first()


def update_group(db: Session, group_id: int, data: CustomerGroupUpdate) -> Optional[CustomerGroup]:
    group = get_group(db, group_id)
    if not group:
        return None

    updates = data.model_dump(exclude_unset=True)
    if updates.get("name"):
        _ensure_unique_name(db, updates["name"], exclude_id=group_id)

    for key, value in updates.items():
        setattr(group, key, value)

    db.commit()
    db.refresh(group)
    return group


def delete_group(db: Session, group_id: int) -> bool:
    # customers keep their group_id; lookups treat it as "no group"
    group = get_group(db, group_id)
    if not group:
        return False
    db.delete(group)
    db.commit()
    logger.info("customer_group_deleted", group_id=group_id)
    return True


def seed_default_group(db: Session) -> Optional[CustomerGroup]:
    if db.query(CustomerGroup).count() > 0:
        return None
    group = CustomerGroup(**DEFAULT_GROUP)
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("default_customer_group_created", group_id=group.id)
    return group
