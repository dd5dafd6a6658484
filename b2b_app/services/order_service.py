from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from b2b_app.core.exceptions import NotFoundError
from b2b_app.core.logging import get_logger
from b2b_app.models.customer import Customer
from b2b_app.models.order import B2BOrder
from b2b_app.schemas.order import OrderCreate
from b2b_app.services.order_validation import is_b2b, validate_customer_cart
from b2b_app.services.rule_store import RuleStore
from b2b_app.services.settings_service import get_setting

logger = get_logger(__name__)


# ---------- RECORD ORDER ----------

def record_order(db: Session, data: OrderCreate):
    """
    Store an incoming B2B order. The total is checked against the customer's
    limits; the order waits for approval unless auto_approve_orders is on
    and the customer is an approved B2B account.
    Returns (order, validation).
    """
    store = RuleStore(db)
    validation, customer = validate_customer_cart(store, data.customer_email, data.total_amount)
    if customer is None:
        raise NotFoundError("Customer not found")

    auto_approve = get_setting(db, "auto_approve_orders") == "true"
    # pending and rejected customers are never auto-approved
    approved = auto_approve and is_b2b(customer) and validation["valid"]

    order = B2BOrder(
        shopify_order_id=data.shopify_order_id,
        order_number=data.order_number,
        customer_id=customer.id,
        total_amount=data.total_amount,
        approval_status="approved" if approved else "pending",
        approved_by="auto" if approved else None,
        approved_at=datetime.utcnow() if approved else None,
    )
    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info(
        "order_recorded",
        order_id=order.id,
        customer_id=customer.id,
        total=order.total_amount,
        status=order.approval_status,
        errors=validation["errors"],
    )
    return order, validation


# ---------- GET / LIST ----------

def list_orders(db: Session) -> List[B2BOrder]:
    return db.query(B2BOrder).order_by(B2BOrder.created_at.desc(), B2BOrder.id.desc()).all()


def list_pending_orders(db: Session) -> List[B2BOrder]:
    return (
        db.query(B2BOrder)
        .filter(B2BOrder.approval_status == "pending")
        .order_by(B2BOrder.created_at.asc(), B2BOrder.id.asc())
        .all()
    )


def get_order(db: Session, order_id: int) -> Optional[B2BOrder]:
    return db.query(B2BOrder).filter(B2BOrder.id == order_id).first()


def get_order_detail(db: Session, order_id: int) -> Optional[dict]:
    row = (
        db.query(B2BOrder, Customer.email, Customer.company_name)
        .outerjoin(Customer, B2BOrder.customer_id == Customer.id)
        .filter(B2BOrder.id == order_id)
        .first()
    )
    if not row:
        return None
    order, email, company_name = row
    return {
        "id": order.id,
        "shopify_order_id": order.shopify_order_id,
        "order_number": order.order_number,
        "customer_id": order.customer_id,
        "total_amount": order.total_amount,
        "approval_status": order.approval_status,
        "rejection_reason": order.rejection_reason,
        "approved_by": order.approved_by,
        "approved_at": order.approved_at,
        "created_at": order.created_at,
        "email": email,
        "company_name": company_name,
    }


# ---------- STATE TRANSITIONS ----------

def approve_order(db: Session, order_id: int, shop: str) -> Optional[B2BOrder]:
    order = get_order(db, order_id)
    if not order:
        return None
    order.approval_status = "approved"
    order.approved_by = shop
    order.approved_at = datetime.utcnow()
    order.rejection_reason = None
    db.commit()
    db.refresh(order)
    logger.info("order_approved", order_id=order.id, shop=shop)
    return order


def reject_order(db: Session, order_id: int, reason: Optional[str] = None) -> Optional[B2BOrder]:
    order = get_order(db, order_id)
    if not order:
        return None
    order.approval_status = "rejected"
    order.rejection_reason = reason or "Order rejected"
    db.commit()
    db.refresh(order)
    logger.info("order_rejected", order_id=order.id, reason=order.rejection_reason)
    return order
