from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from b2b_app.core.exceptions import B2BError
from b2b_app.core.logging import get_logger, setup_logging
from b2b_app.database.connection import Base, SessionLocal, engine
from b2b_app.middleware.metrics import MetricsMiddleware, new_metrics
from b2b_app.models import app_setting, customer, customer_group, order, pricing_rule, quote_request  # noqa: F401
from b2b_app.routes import system
from b2b_app.routes.customers import router as customers_router
from b2b_app.routes.customer_groups import router as groups_router
from b2b_app.routes.orders import router as orders_router
from b2b_app.routes.pricing.calculate_price import router as calculate_price_router
from b2b_app.routes.pricing.pricing_route import router as pricing_router
from b2b_app.routes.quotes import router as quotes_router
from b2b_app.routes.settings import router as settings_router
from b2b_app.routes.storefront import router as storefront_router
from b2b_app.services.customer_group_service import seed_default_group
from b2b_app.services.settings_service import seed_default_settings

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="B2B Wholesale Manager")

app.add_middleware(MetricsMiddleware)


@app.exception_handler(B2BError)
async def b2b_error_handler(request: Request, exc: B2BError):
    logger.warning("request_rejected", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(storefront_router)
app.include_router(calculate_price_router)
app.include_router(pricing_router)
app.include_router(customers_router)
app.include_router(groups_router)
app.include_router(quotes_router)
app.include_router(orders_router)
app.include_router(settings_router)
app.include_router(system.router)


@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_default_group(db)
        seed_default_settings(db)
    finally:
        db.close()

    app.state.start_time = datetime.utcnow()
    app.state.metrics = new_metrics()
    logger.info("app_started")
