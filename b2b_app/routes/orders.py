from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.dependencies.store import get_rule_store
from b2b_app.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderRecordedResponse,
    OrderReject,
    OrderResponse,
)
from b2b_app.schemas.pricing import CartValidationRequest, CartValidationResponse
from b2b_app.schemas.session import SessionTokenData
from b2b_app.services.order_service import (
    approve_order,
    get_order_detail,
    list_orders,
    list_pending_orders,
    record_order,
    reject_order,
)
from b2b_app.services.order_validation import is_b2b, validate_customer_cart
from b2b_app.services.rule_store import RuleStore

router = APIRouter(prefix="/orders", tags=["B2B Orders"], dependencies=[Depends(require_admin)])


@router.post("/", response_model=OrderRecordedResponse)
def create(data: OrderCreate, db: Session = Depends(get_db)):
    order, validation = record_order(db, data)
    return {"order": order, "valid": validation["valid"], "errors": validation["errors"]}


@router.get("/", response_model=List[OrderResponse])
def list_all(db: Session = Depends(get_db)):
    return list_orders(db)


@router.get("/pending", response_model=List[OrderResponse])
def list_pending(db: Session = Depends(get_db)):
    return list_pending_orders(db)


@router.post("/validate", response_model=CartValidationResponse)
def validate(body: CartValidationRequest, store: RuleStore = Depends(get_rule_store)):
    result, customer = validate_customer_cart(store, body.customer_email, body.total_amount)
    return {"valid": result["valid"], "is_b2b": is_b2b(customer), "errors": result["errors"]}


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get(order_id: int, db: Session = Depends(get_db)):
    order = get_order_detail(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("/{order_id}/approve", response_model=OrderResponse)
def approve(
    order_id: int,
    session: SessionTokenData = Depends(require_admin),
    db: Session = Depends(get_db),
):
    order = approve_order(db, order_id, shop=session.shop)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("/{order_id}/reject", response_model=OrderResponse)
def reject(order_id: int, body: Optional[OrderReject] = None, db: Session = Depends(get_db)):
    order = reject_order(db, order_id, reason=body.reason if body else None)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
