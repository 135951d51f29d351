import os
import sys
from pathlib import Path

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "tests"))
os.environ.setdefault("TABLEQUERY_ENV", "test")

from listing_models import Article, Base, Category, Product, ProductStatus
from tablequery.api import get_table_params, install_table_query
from tablequery.bootstrap import register_default_filters
from tablequery.filters.registry import FilterRegistry, filter_registry
from tablequery.schemas.params import TableParams
from tablequery.services.table_query import TableQueryService


@pytest.fixture(scope="session", autouse=True)
def default_filters():
    register_default_filters(filter_registry)
    yield filter_registry


@pytest.fixture
def registry():
    return register_default_filters(FilterRegistry())


@pytest.fixture(scope="session")
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    SessionTesting = sessionmaker(bind=connection, autoflush=False, autocommit=False)
    session = SessionTesting()
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def catalog(db_session):
    """25 products: odd ids active, even ids draft, ids 1-10 are tools,
    every fifth description mentions a hammer."""
    tools = Category(id=1, name="Tools")
    toys = Category(id=2, name="Toys")
    db_session.add_all([tools, toys])
    db_session.flush()
    products = [
        Product(
            id=i,
            name=f"Product {i:02d}",
            description="Sturdy hammer" if i % 5 == 0 else "Plain item",
            status=ProductStatus.active if i % 2 else ProductStatus.draft,
            price=i * 100,
            category_id=tools.id if i <= 10 else toys.id,
        )
        for i in range(1, 26)
    ]
    db_session.add_all(products)
    db_session.add_all(
        [
            Article(id=1, title="Hammer review", body="b", category_id=tools.id),
            Article(id=2, title="Toy roundup", body="b", category_id=toys.id),
        ]
    )
    db_session.flush()
    db_session.expire_all()
    return products


@pytest.fixture(scope="function")
def client(db_session, catalog):
    app = FastAPI()
    install_table_query(app)

    @app.get("/products")
    def list_products(params: TableParams = Depends(get_table_params)):
        service = TableQueryService.for_model(Product)
        query = service.apply_all(db_session.query(Product), params)
        page = service.paginate(query, params.page, params.per_page)
        return {
            "items": [item.name for item in page.items],
            "total": page.total,
            "last_page": page.last_page,
            "filters": [o.model_dump(mode="json") for o in service.last_filter_outcomes],
        }

    return TestClient(app)
