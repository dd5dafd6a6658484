from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from b2b_app.core.exceptions import NotFoundError
from b2b_app.core.logging import get_logger
from b2b_app.enums.statuses import CustomerStatus
from b2b_app.models.customer import Customer
from b2b_app.models.customer_group import CustomerGroup
from b2b_app.schemas.customer import CustomerSignup, CustomerUpdate
from b2b_app.services.rule_store import normalize_email

logger = get_logger(__name__)


# --------------------------
# SIGNUP (public registration form)
# --------------------------
def signup_customer(db: Session, data: CustomerSignup) -> Customer:
    email = normalize_email(data.email)
    existing = db.query(Customer).filter(Customer.email == email).first()
    if existing:
        raise HTTPException(
            status_code=400,
            detail="This email is already registered. Please use a different email or contact support.",
        )

    customer = Customer(**data.model_dump(exclude={"email"}))
    customer.email = email
    customer.status = CustomerStatus.pending.value
    db.add(customer)
    db.commit()
    db.refresh(customer)
    logger.info("customer_signup", customer_id=customer.id, company=customer.company_name)
    return customer


# --------------------------
# GET / LIST
# --------------------------
def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def list_customers(db: Session, status: Optional[str] = None) -> List[dict]:
    """
    Customers joined with their group's name for display. Orphaned group ids
    show up as "None".
    """
    query = (
        db.query(Customer, CustomerGroup.name.label("group_name"))
        .outerjoin(CustomerGroup, Customer.group_id == CustomerGroup.id)
    )
    if status:
        query = query.filter(Customer.status == status)

    rows = query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()
    return [
        {
            "id": c.id,
            "name": c.company_name or c.email.split("@")[0],
            "email": c.email,
            "group_name": group_name or "None",
            "status": c.status,
            "created_at": c.created_at,
        }
        for c, group_name in rows
    ]


# --------------------------
# APPROVAL WORKFLOW
# --------------------------
def approve_customer(db: Session, customer_id: int) -> Optional[Customer]:
    customer = get_customer(db, customer_id)
    if not customer:
        return None
    customer.status = CustomerStatus.approved.value
    customer.approved_at = datetime.utcnow()
    customer.rejection_reason = None
    db.commit()
    db.refresh(customer)
    logger.info("customer_approved", customer_id=customer.id)
    return customer


def reject_customer(db: Session, customer_id: int, reason: Optional[str] = None) -> Optional[Customer]:
    customer = get_customer(db, customer_id)
    if not customer:
        return None
    customer.status = CustomerStatus.rejected.value
    customer.rejection_reason = reason or "Application rejected"
    db.commit()
    db.refresh(customer)
    logger.info("customer_rejected", customer_id=customer.id, reason=customer.rejection_reason)
    return customer


# --------------------------
# GROUP ASSIGNMENT (snapshot)
# --------------------------
def assign_group(db: Session, customer_id: int, group_id: int) -> Optional[Customer]:
    """
    Copy the group's commercial terms onto the customer. Later edits to the
    group do not flow through; the customer keeps this snapshot.
    """
    customer = get_customer(db, customer_id)
    if not customer:
        return None

    group = db.query(CustomerGroup).filter(CustomerGroup.id == group_id).first()
    if not group:
        raise NotFoundError("Customer group not found")

    customer.group_id = group.id
    customer.discount_percentage = group.discount_percentage or 0.0
    customer.minimum_order_value = group.minimum_order_value
    customer.maximum_order_value = group.maximum_order_value
    customer.payment_terms = group.payment_terms

    if group.auto_approve and customer.status == CustomerStatus.pending:
        customer.status = CustomerStatus.approved.value
        customer.approved_at = datetime.utcnow()

    db.commit()
    db.refresh(customer)
    logger.info("customer_group_assigned", customer_id=customer.id, group_id=group.id)
    return customer


# --------------------------
# UPDATE / DELETE
# --------------------------
def update_customer(db: Session, customer_id: int, data: CustomerUpdate) -> Optional[Customer]:
    customer = get_customer(db, customer_id)
    if not customer:
        return None

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(customer, key, value)

    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> bool:
    customer = get_customer(db, customer_id)
    if not customer:
        return False
    db.delete(customer)
    db.commit()
    return True
