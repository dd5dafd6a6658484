from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.schemas.customer_group import (
    CustomerGroupCreate,
    CustomerGroupResponse,
    CustomerGroupUpdate,
)
from b2b_app.services.customer_group_service import (
    create_group,
    delete_group,
    get_group,
    list_groups,
    update_group,
)

router = APIRouter(prefix="/groups", tags=["Customer Groups"], dependencies=[Depends(require_admin)])


@router.post("/", response_model=CustomerGroupResponse)
def create(data: CustomerGroupCreate, db: Session = Depends(get_db)):
    return create_group(db, data)


@router.get("/", response_model=List[CustomerGroupResponse])
def list_all(db: Session = Depends(get_db)):
    return list_groups(db)


@router.get("/{group_id}", response_model=CustomerGroupResponse)
def get(group_id: int, db: Session = Depends(get_db)):
    group = get_group(db, group_id)
    if not group:
        raise HTTPException(404, "Customer group not found")
    return group


@router.put("/{group_id}", response_model=CustomerGroupResponse)
def update(group_id: int, data: CustomerGroupUpdate, db: Session = Depends(get_db)):
    group = update_group(db, group_id, data)
    if not group:
        raise HTTPException(404, "Customer group not found")
    return group


@router.delete("/{group_id}")
def delete(group_id: int, db: Session = Depends(get_db)):
    if not delete_group(db, group_id):
        raise HTTPException(404, "Customer group not found")
    return {"message": "Customer group deleted"}
