from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from b2b_app.core.logging import get_logger
from b2b_app.models.quote_request import QuoteRequest
from b2b_app.schemas.quote import QuoteRequestCreate, QuoteRespond
from b2b_app.services.rule_store import RuleStore, normalize_email

logger = get_logger(__name__)


def create_quote_request(db: Session, data: QuoteRequestCreate) -> QuoteRequest:
    customer = RuleStore(db).find_customer_by_email(data.customer_email)

    quote = QuoteRequest(
        customer_id=customer.id if customer else 0,
        customer_email=normalize_email(data.customer_email),
        company_name=data.company_name or "",
        products=list(data.products),
        quantities=list(data.quantities),
        message=data.message or "",
        status="pending",
    )
    db.add(quote)
    db.commit()
    db.refresh(quote)
    logger.info("quote_requested", quote_id=quote.id, customer_id=quote.customer_id, lines=len(quote.products))
    return quote


def list_quote_requests(db: Session, status: Optional[str] = None) -> List[QuoteRequest]:
    query = db.query(QuoteRequest)
    if status:
        query = query.filter(QuoteRequest.status == status)
    return query.order_by(QuoteRequest.created_at.desc(), QuoteRequest.id.desc()).all()


def get_quote_request(db: Session, quote_id: int) -> Optional[QuoteRequest]:
    return db.query(QuoteRequest).filter(QuoteRequest.id == quote_id).first()


def respond_to_quote(db: Session, quote_id: int, data: QuoteRespond, shop: str) -> Optional[QuoteRequest]:
    quote = get_quote_request(db, quote_id)
    if not quote:
        return None

    quote.quote_amount = data.quote_amount
    quote.quote_valid_until = data.quote_valid_until
    quote.quote_notes = data.quote_notes or ""
    quote.status = data.status.value
    quote.responded_by = shop
    quote.responded_at = datetime.utcnow()

    db.commit()
    db.refresh(quote)
    logger.info("quote_responded", quote_id=quote.id, amount=quote.quote_amount, shop=shop)
    return quote


def update_quote_status(db: Session, quote_id: int, status: str) -> Optional[QuoteRequest]:
    quote = get_quote_request(db, quote_id)
    if not quote:
        return None
    quote.status = status
    db.commit()
    db.refresh(quote)
    return quote


def delete_quote_request(db: Session, quote_id: int) -> bool:
    quote = get_quote_request(db, quote_id)
    if not quote:
        return False
    db.delete(quote)
    db.commit()
    return True
