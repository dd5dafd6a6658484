from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class HealthCheckResponse(BaseModel):
    status: str
    now: datetime
    uptime_seconds: float
    db_ok: bool
    extra: Optional[Dict[str, Any]] = None


class SystemMetricsResponse(BaseModel):
    uptime_seconds: float
    now: datetime

    # middleware counters
    requests_count: int
    avg_response_ms: Optional[float] = None
    price_calculations: int = 0
    slow_price_calculations: int = 0

    # DB metrics
    approved_customers: int
    pending_orders: int
    active_pricing_rules: int

    extra: Optional[Dict[str, Any]] = None
