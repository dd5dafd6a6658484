from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.enums.statuses import QuoteStatus
from b2b_app.schemas.quote import (
    QuoteRequestCreate,
    QuoteRequestResponse,
    QuoteRespond,
    QuoteStatusUpdate,
    QuoteSubmittedResponse,
)
from b2b_app.schemas.session import SessionTokenData
from b2b_app.services.quote_service import (
    create_quote_request,
    delete_quote_request,
    get_quote_request,
    list_quote_requests,
    respond_to_quote,
    update_quote_status,
)

router = APIRouter(prefix="/quotes", tags=["Quote Requests"])


# ---------- PUBLIC REQUEST ----------

@router.post("/request", response_model=QuoteSubmittedResponse)
def request_quote(data: QuoteRequestCreate, db: Session = Depends(get_db)):
    quote = create_quote_request(db, data)
    return {"id": quote.id}


# ---------- ADMIN ----------

@router.get("/", response_model=List[QuoteRequestResponse], dependencies=[Depends(require_admin)])
def list_quotes(status: Optional[QuoteStatus] = None, db: Session = Depends(get_db)):
    return list_quote_requests(db, status=status.value if status else None)


@router.get("/{quote_id}", response_model=QuoteRequestResponse, dependencies=[Depends(require_admin)])
def get_quote(quote_id: int, db: Session = Depends(get_db)):
    quote = get_quote_request(db, quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote request not found")
    return quote


@router.post("/{quote_id}/respond", response_model=QuoteRequestResponse)
def respond(
    quote_id: int,
    data: QuoteRespond,
    session: SessionTokenData = Depends(require_admin),
    db: Session = Depends(get_db),
):
    quote = respond_to_quote(db, quote_id, data, shop=session.shop)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote request not found")
    return quote


@router.patch("/{quote_id}/status", response_model=QuoteRequestResponse, dependencies=[Depends(require_admin)])
def set_status(quote_id: int, data: QuoteStatusUpdate, db: Session = Depends(get_db)):
    quote = update_quote_status(db, quote_id, data.status.value)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote request not found")
    return quote


@router.delete("/{quote_id}", dependencies=[Depends(require_admin)])
def delete_quote(quote_id: int, db: Session = Depends(get_db)):
    if not delete_quote_request(db, quote_id):
        raise HTTPException(status_code=404, detail="Quote request not found")
    return {"success": True, "message": "Quote request deleted successfully"}
