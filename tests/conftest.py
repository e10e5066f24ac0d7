import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from storefront.core.identifiers import new_object_id
from storefront.db.session import create_db_and_tables, get_session
from storefront.db.store import DocumentStore
from storefront.main import app
from storefront.models.cart import CartItem
from storefront.services.cart import CartAggregator


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads, fresh tables per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def cart_store(session):
    return DocumentStore(session, CartItem)


@pytest.fixture
def aggregator(cart_store):
    return CartAggregator(cart_store)


@pytest.fixture
def test_client(engine):
    """
    FastAPI TestClient whose sessions are bound to the in-memory engine.
    The lifespan is not entered, so the configured database is never touched.
    """
    def get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_test_session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id():
    return new_object_id()


@pytest.fixture
def product_id():
    return new_object_id()
