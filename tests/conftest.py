import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATALOG_BACKEND"] = "db"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.main import create_app
from storefront.repos.product_repo import ProductRepo
from storefront.utils.settings import CommerceConfig

DEFAULT_ADDRESS = "ADDRESS_NOT_SET"
SHIPPING_ADDRESS = "221B Baker Street, London NW1 6XE"

PRODUCTS = [
    {"id": "prod-shoes", "name": "Running Shoes", "category": "Fashion", "cost": Decimal("30")},
    {"id": "prod-racquet", "name": "Badminton Racquet", "category": "Sports", "cost": Decimal("100")},
    {"id": "prod-watch", "name": "Leather Watch", "category": "Electronics", "cost": Decimal("60")},
]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite emits its own BEGIN lazily, which breaks SAVEPOINT; take over transaction control
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    with factory() as s:
        s.add_all(ProductModel(**p) for p in PRODUCTS)
        s.commit()
    return factory


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def config():
    return CommerceConfig(
        default_wallet_money=Decimal("500"),
        default_address=DEFAULT_ADDRESS,
        default_payment_option="PAYMENT_OPTION_DEFAULT",
    )


@pytest.fixture()
def catalog(db):
    return ProductRepo(db)


def make_user(session, email="crio-user@example.com", wallet="100", address=SHIPPING_ADDRESS, name="crio-user"):
    user = UserModel(name=name, email=email, wallet_money=Decimal(wallet), address=address)
    session.add(user)
    session.commit()
    return user


@pytest.fixture()
def user(db):
    return make_user(db)


@pytest.fixture()
def app(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)
