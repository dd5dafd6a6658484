import os

os.environ.setdefault("SHOPIFY_API_SECRET", "test-shopify-secret")
os.environ.setdefault("SHOPIFY_API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from b2b_app.core.security import create_session_token
from b2b_app.database.connection import Base, get_db
from b2b_app.main import app
from b2b_app.models.customer import Customer
from b2b_app.models.customer_group import CustomerGroup
from b2b_app.models.pricing_rule import PricingRule

TEST_DB_URL = "sqlite:///:memory:"
TEST_SHOP = "wholesale-test.myshopify.com"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_test_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    connection = engine.connect()
    trans = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers():
    token = create_session_token(TEST_SHOP, user_id="42")
    return {"Authorization": f"Bearer {token}"}


# ---------- row factories ----------

def add_customer(db, email="buyer@acme-supply.com", status="approved", **fields) -> Customer:
    fields.setdefault("company_name", "Acme Supply")
    customer = Customer(email=email, status=status, **fields)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def add_group(db, name="Gold", **fields) -> CustomerGroup:
    group = CustomerGroup(name=name, **fields)
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def add_rule(db, name="Rule", type="percentage", value=10.0, **fields) -> PricingRule:
    rule = PricingRule(name=name, type=type, value=value, **fields)
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule
