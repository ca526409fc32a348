import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.dependencies import get_payment_gateway
from storefront.auth_local import create_access_token
from storefront.core_settings import Settings, get_settings
from storefront.domain.models import Base, Product, SizeStock, User
from storefront.infrastructure.db import get_db
from storefront.infrastructure.payment_gateway import RazorpayGateway
from storefront.main import app

GATEWAY_KEY_ID = "rzp_test_key"
GATEWAY_SECRET = "rzp_test_secret"

@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        RUN_MIGRATIONS=False,
        JWT_SECRET="storefront-test-secret-0123456789abcdef",
        RAZORPAY_KEY_ID=GATEWAY_KEY_ID,
        RAZORPAY_KEY_SECRET=GATEWAY_SECRET,
        RAZORPAY_API_URL="https://gateway.test/v1",
    )

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def gateway_requests():
    return []

@pytest.fixture
def gateway(settings, gateway_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        gateway_requests.append(request)
        payload = json.loads(request.content)
        return httpx.Response(200, json={
            "id": f"order_{payload['receipt']}",
            "amount": payload["amount"],
            "currency": payload["currency"],
            "receipt": payload["receipt"],
            "status": "created",
        })

    return RazorpayGateway(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_URL,
        transport=httpx.MockTransport(handler),
    )

@pytest.fixture
def client(session_factory, settings, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()

def _make_user(db, name, email, role="user", is_active=True):
    user = User(name=name, email=email, phone="9876543210", role=role, is_active=is_active)
    db.add(user)
    db.commit()
    return user

@pytest.fixture
def customer(db):
    return _make_user(db, "Asha Rao", "asha@example.com")

@pytest.fixture
def other_customer(db):
    return _make_user(db, "Vikram Shah", "vikram@example.com")

@pytest.fixture
def admin(db):
    return _make_user(db, "Store Admin", "admin@zeynix.in", role="admin")

def auth_headers(user, settings):
    return {"Authorization": f"Bearer {create_access_token(user.id, settings)}"}

@pytest.fixture
def customer_headers(customer, settings):
    return auth_headers(customer, settings)

@pytest.fixture
def other_headers(other_customer, settings):
    return auth_headers(other_customer, settings)

@pytest.fixture
def admin_headers(admin, settings):
    return auth_headers(admin, settings)

@pytest.fixture
def make_product(db):
    def factory(title="Linen Shirt", stock=None, actual_price=800, discount_price=500,
                brand="Zeynix", images=None, is_active=True, status="published"):
        product = Product(
            title=title,
            brand=brand,
            images=images if images is not None else ["https://cdn.example.com/linen-1.jpg"],
            actual_price=actual_price,
            discount_price=discount_price,
            is_active=is_active,
            status=status,
        )
        for size, count in (stock or {"M": 5}).items():
            product.sizes.append(SizeStock(size=size, stock=count, in_stock=count > 0))
        product.recalculate_discount()
        db.add(product)
        db.commit()
        return product
    return factory

def stock_of(session_factory, product_id, size):
    with session_factory() as session:
        row = session.query(SizeStock).filter_by(product_id=product_id, size=size).one()
        return row.stock

def order_payload(product_id, size="M", quantity=2, price=500, total=None, **address):
    shipping = {
        "firstName": "Asha",
        "lastName": "Rao",
        "phone": "9876543210",
        "email": "asha@example.com",
        "addressLine1": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pincode": "560001",
    }
    shipping.update(address)
    return {
        "items": [{"productId": product_id, "size": size, "quantity": quantity, "price": price}],
        "totalAmount": total if total is not None else price * quantity,
        "shippingAddress": shipping,
    }
