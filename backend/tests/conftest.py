"""Shared test fixtures for all test modules."""

import contextlib
import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import database as db_module
from app.core.database import Base, get_db
from app.models.client import Client
from app.models.order import Order
from app.models.promo_code import DiscountType, PromoCode, PromoCodeStatus
from app.models.promo_code_usage import PromoCodeUsage
from app.models.tenant import Tenant
from app.services.client_token_service import ClientTokenService

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

TENANT_ID = uuid.UUID("00000000-0000-0000-0000-00000000000a")
OTHER_TENANT_ID = uuid.UUID("00000000-0000-0000-0000-00000000000b")
CLIENT_ID = uuid.UUID("00000000-0000-0000-0000-0000000000c1")
OTHER_CLIENT_ID = uuid.UUID("00000000-0000-0000-0000-0000000000c2")
COOK_ID = uuid.UUID("00000000-0000-0000-0000-0000000000d1")
OTHER_COOK_ID = uuid.UUID("00000000-0000-0000-0000-0000000000d2")
TENANT_OWNERS = {TENANT_ID: COOK_ID, OTHER_TENANT_ID: OTHER_COOK_ID}


def _seed(session: Session) -> None:
    """Insert the two storefronts, their cooks and two customers."""
    session.add_all(
        [
            Client(id=CLIENT_ID, name="Amina Bello", email="amina@test.com"),
            Client(id=OTHER_CLIENT_ID, name="Paul Essomba", email="paul@test.com"),
            Client(id=COOK_ID, name="Ngozi Okafor", email="ngozi@test.com"),
            Client(id=OTHER_COOK_ID, name="Rose Mbarga", email="rose@test.com"),
        ]
    )
    session.flush()
    session.add_all(
        [
            Tenant(
                id=TENANT_ID,
                name="Mama Ngozi Kitchen",
                slug="mama-ngozi",
                timezone="UTC",
                owner_id=COOK_ID,
            ),
            Tenant(
                id=OTHER_TENANT_ID,
                name="Chez Tante Rose",
                slug="tante-rose",
                timezone="UTC",
                owner_id=OTHER_COOK_ID,
            ),
        ]
    )
    session.commit()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    session = _TestSessionLocal()
    try:
        _seed(session)
    finally:
        session.close()

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository and service testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def today():
    """Current date in the seeded tenants' timezone (UTC)."""
    return datetime.now(UTC).date()


@pytest.fixture
def tenant_id():
    return TENANT_ID


@pytest.fixture
def other_tenant_id():
    return OTHER_TENANT_ID


@pytest.fixture
def client_id():
    return CLIENT_ID


@pytest.fixture
def other_client_id():
    return OTHER_CLIENT_ID


@pytest.fixture
def make_promo_code(db_session, today):
    """Factory inserting promo code rows directly, bypassing creation rules.

    Defaults describe a code that passes every check.
    """

    def _make(code: str = "WELCOME10", tenant_id: uuid.UUID = TENANT_ID, **overrides):
        fields = {
            "discount_type": DiscountType.PERCENTAGE.value,
            "discount_value": 10,
            "status": PromoCodeStatus.ACTIVE.value,
            "starts_at": today,
            "ends_at": None,
            "max_uses": 0,
            "max_uses_per_client": 0,
            "minimum_order_amount": 0,
            "times_used": 0,
        }
        fields.update(overrides)
        promo_code = PromoCode(tenant_id=tenant_id, code=code, **fields)
        db_session.add(promo_code)
        db_session.commit()
        db_session.refresh(promo_code)
        return promo_code

    return _make


@pytest.fixture
def record_usage(db_session):
    """Factory writing a past redemption (order plus usage row) for a client."""
    counter = {"n": 0}

    def _record(promo_code: PromoCode, client_id: uuid.UUID, discount_amount: int = 150):
        counter["n"] += 1
        order = Order(
            tenant_id=promo_code.tenant_id,
            client_id=client_id,
            order_number=f"TEST-{counter['n']:04d}",
            subtotal=3000,
            delivery_fee=0,
            promo_code_id=promo_code.id,
            promo_discount=discount_amount,
            grand_total=3000 - discount_amount,
        )
        db_session.add(order)
        db_session.flush()
        usage = PromoCodeUsage(
            promo_code_id=promo_code.id,
            order_id=order.id,
            client_id=client_id,
            discount_amount=discount_amount,
        )
        db_session.add(usage)
        db_session.commit()
        return usage

    return _record


@pytest.fixture
def auth_headers():
    """Headers addressing ``tenant`` as the signed-in ``client``."""

    def _headers(client: uuid.UUID = CLIENT_ID, tenant: uuid.UUID = TENANT_ID) -> dict[str, str]:
        token = ClientTokenService.generate_token(client)
        return {"Authorization": f"Bearer {token}", "X-Tenant-Id": str(tenant)}

    return _headers


@pytest.fixture
def cook_id():
    return COOK_ID


@pytest.fixture
def other_cook_id():
    return OTHER_COOK_ID


@pytest.fixture
def cook_headers(auth_headers):
    """Headers addressing ``tenant`` as the cook who owns it."""

    def _headers(tenant: uuid.UUID = TENANT_ID) -> dict[str, str]:
        return auth_headers(client=TENANT_OWNERS[tenant], tenant=tenant)

    return _headers
