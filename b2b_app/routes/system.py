from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime

from b2b_app.core.logging import get_logger
from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.schemas.system import HealthCheckResponse, SystemMetricsResponse
from b2b_app.models.customer import Customer
from b2b_app.models.order import B2BOrder
from b2b_app.models.pricing_rule import PricingRule

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Lightweight public health check.
    Returns ok + DB connectivity check (SELECT 1).
    """
    now = datetime.utcnow()
    start_time = getattr(request.app.state, "start_time", now)
    uptime_seconds = (now - start_time).total_seconds()

    db_ok = True
    extra = {}
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("health_check_db_failed", error=str(e))
        db_ok = False
        extra["db_error"] = str(e)

    return HealthCheckResponse(
        status="ok" if db_ok else "degraded",
        now=now,
        uptime_seconds=uptime_seconds,
        db_ok=db_ok,
        extra=extra or None,
    )


@router.get("/metrics", response_model=SystemMetricsResponse, dependencies=[Depends(require_admin)])
def system_metrics(request: Request, db: Session = Depends(get_db)):
    """
    Admin-only system metrics in JSON form.
    Uses in-process counters stored on app.state.metrics and DB-derived counts.
    """
    now = datetime.utcnow()
    start_time = getattr(request.app.state, "start_time", now)
    uptime_seconds = (now - start_time).total_seconds()

    metrics = getattr(request.app.state, "metrics", None) or {}
    requests_count = int(metrics.get("requests", 0))
    total_response_ms = float(metrics.get("total_response_ms", 0.0))
    avg_response_ms = (total_response_ms / requests_count) if requests_count > 0 else None

    return SystemMetricsResponse(
        uptime_seconds=uptime_seconds,
        now=now,
        requests_count=requests_count,
        avg_response_ms=avg_response_ms,
        price_calculations=int(metrics.get("price_calculations", 0)),
        slow_price_calculations=int(metrics.get("slow_price_calculations", 0)),
        approved_customers=db.query(Customer).filter(Customer.status == "approved").count(),
        pending_orders=db.query(B2BOrder).filter(B2BOrder.approval_status == "pending").count(),
        active_pricing_rules=db.query(PricingRule).filter(PricingRule.active.is_(True)).count(),
        extra=None,
    )
