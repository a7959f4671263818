"""Shared pytest fixtures for model-class-builder tests."""

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from model_class_builder.codegen.models import ClassModel, FieldModel

# Tables live in an attached "sales" schema so lookups are schema-qualified
SALES_DDL = [
    """
    CREATE TABLE sales.customers (
        id INTEGER NOT NULL PRIMARY KEY,
        email VARCHAR(120) NOT NULL,
        name VARCHAR(80),
        CONSTRAINT uq_customers_email UNIQUE (email)
    )
    """,
    "CREATE UNIQUE INDEX sales.ix_customers_name ON customers (name)",
    """
    CREATE TABLE sales.orders (
        id INTEGER NOT NULL PRIMARY KEY,
        customer_id INTEGER NOT NULL REFERENCES customers (id),
        note VARCHAR(200)
    )
    """,
    """
    CREATE TABLE sales.order_lines (
        order_id INTEGER NOT NULL REFERENCES orders (id),
        line_no INTEGER NOT NULL,
        amount NUMERIC(10, 2),
        shipped_on DATE,
        PRIMARY KEY (order_id, line_no)
    )
    """,
]

SHOP_DDL = [
    """
    CREATE TABLE customers (
        id INTEGER NOT NULL PRIMARY KEY,
        name VARCHAR(80) NOT NULL,
        notes TEXT
    )
    """,
    """
    CREATE TABLE invoices (
        id INTEGER NOT NULL PRIMARY KEY,
        customer_id INTEGER REFERENCES customers (id),
        total NUMERIC(12, 2) NOT NULL
    )
    """,
]


@pytest.fixture
def engine():
    """In-memory SQLite engine with the sales schema attached and populated."""
    engine = create_engine("sqlite://", poolclass=StaticPool)

    @event.listens_for(engine, "connect")
    def attach_sales(dbapi_connection, connection_record):
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS sales")

    with engine.begin() as conn:
        for ddl in SALES_DDL:
            conn.exec_driver_sql(ddl)

    yield engine
    engine.dispose()


@pytest.fixture
def connection(engine):
    """An open connection to the sales database."""
    with engine.connect() as conn:
        yield conn


@pytest.fixture
def shop_db_path(tmp_path):
    """A SQLite database file with tables in the main schema."""
    path = tmp_path / "shop.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for ddl in SHOP_DDL:
            conn.exec_driver_sql(ddl)
    engine.dispose()
    return path


@pytest.fixture
def orders_model():
    """Class model matching sales.orders."""
    return ClassModel(
        class_name="orders",
        fields=[
            FieldModel(name="id", target_type="int", is_primary_key=True),
            FieldModel(name="customer_id", target_type="int", references="sales.customers.id"),
            FieldModel(name="note", target_type="str", size_constraint=200),
        ],
        referencing_tables=["sales.order_lines"],
    )
