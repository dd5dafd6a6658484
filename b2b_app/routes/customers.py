from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.enums.statuses import CustomerStatus
from b2b_app.schemas.customer import (
    CustomerGroupAssign,
    CustomerListItem,
    CustomerReject,
    CustomerResponse,
    CustomerSignup,
    CustomerUpdate,
)
from b2b_app.services.customer_service import (
    approve_customer,
    assign_group,
    delete_customer,
    get_customer,
    list_customers,
    reject_customer,
    signup_customer,
    update_customer,
)

router = APIRouter(prefix="/customers", tags=["B2B Customers"])


# ---------- PUBLIC SIGNUP ----------

@router.post("/signup", response_model=CustomerResponse)
def signup(data: CustomerSignup, db: Session = Depends(get_db)):
    return signup_customer(db, data)


# ---------- ADMIN ----------

@router.get("/", response_model=List[CustomerListItem], dependencies=[Depends(require_admin)])
def list_all(status: Optional[CustomerStatus] = None, db: Session = Depends(get_db)):
    return list_customers(db, status=status.value if status else None)


@router.get("/{customer_id}", response_model=CustomerResponse, dependencies=[Depends(require_admin)])
def get(customer_id: int, db: Session = Depends(get_db)):
    customer = get_customer(db, customer_id)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.post("/{customer_id}/approve", response_model=CustomerResponse, dependencies=[Depends(require_admin)])
def approve(customer_id: int, db: Session = Depends(get_db)):
    customer = approve_customer(db, customer_id)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.post("/{customer_id}/reject", response_model=CustomerResponse, dependencies=[Depends(require_admin)])
def reject(customer_id: int, body: Optional[CustomerReject] = None, db: Session = Depends(get_db)):
    customer = reject_customer(db, customer_id, reason=body.reason if body else None)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.put("/{customer_id}/group", response_model=CustomerResponse, dependencies=[Depends(require_admin)])
def set_group(customer_id: int, body: CustomerGroupAssign, db: Session = Depends(get_db)):
    customer = assign_group(db, customer_id, body.group_id)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.patch("/{customer_id}", response_model=CustomerResponse, dependencies=[Depends(require_admin)])
def update(customer_id: int, data: CustomerUpdate, db: Session = Depends(get_db)):
    customer = update_customer(db, customer_id, data)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer


@router.delete("/{customer_id}", dependencies=[Depends(require_admin)])
def delete(customer_id: int, db: Session = Depends(get_db)):
    if not delete_customer(db, customer_id):
        raise HTTPException(404, "Customer not found")
    return {"message": "Customer deleted"}
