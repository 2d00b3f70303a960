import os
import tempfile

# Must be set before app.config is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="marketplace-uploads-")

import uuid
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.category import Category
from app.models.product import Product
from app.models.user import User, UserRole, UserStatus
from app.services.auth_service import create_tokens
from app.utils import security
from app.utils.storage import LocalBlobStore, get_blob_store


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(str(tmp_path / "uploads"), "https://cdn.test")


@pytest.fixture
def client(session_factory, blob_store):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(
        email=None,
        role=UserRole.SELLER,
        status=UserStatus.VERIFIED,
        password="secret123",
        name="Test Seller",
        shop_name="Test Shop",
    ) -> User:
        user = User(
            name=name,
            email=email or f"{uuid.uuid4().hex[:10]}@example.com",
            role=role,
            status=status,
            password_hash=security.get_password_hash(password) if password else None,
            shop_name=shop_name,
            address="12 Market Road, Pune",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=UserRole.ADMIN, name="Admin", shop_name=None)


@pytest.fixture
def seller(make_user):
    return make_user(email="seller@example.com")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_tokens(user)['token']}"}


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def seller_headers(seller):
    return bearer(seller)


@pytest.fixture
def category(db):
    category = Category(name="Groceries")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_product(db, category):
    def _make_product(name="Rice 5kg", price="100.00", discount="0", stock=10, **kwargs) -> Product:
        product = Product(
            category_id=kwargs.pop("category_id", category.id),
            name=name,
            price=Decimal(price),
            discount=Decimal(discount),
            stock=stock,
            unit=kwargs.pop("unit", "bag"),
            **kwargs
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make_product


@pytest.fixture
def auth_headers():
    return bearer
