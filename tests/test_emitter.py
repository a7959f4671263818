"""Tests for dataclass source rendering."""

import pytest

from model_class_builder.codegen import ClassModel, FieldModel, WrapMode, render_class
from model_class_builder.codegen.emitter import python_identifier


ORDERS_NESTED = '''# referencing tables: sales.order_lines
@dataclass
class orders:
    # primary key column
    id: int
    # references sales.customers.id
    customer_id: int
    # max length 200
    note: str = field(metadata={"max_length": 200})
'''


class TestNestedMode:
    """Test bare class output."""

    def test_orders(self, orders_model):
        assert render_class(orders_model) == ORDERS_NESTED

    def test_no_header(self, orders_model):
        source = render_class(orders_model, mode=WrapMode.NESTED, namespace="sales")
        assert "import" not in source
        assert '"""' not in source

    def test_without_attributes(self, orders_model):
        source = render_class(orders_model, include_attributes=False)

        assert "max length" not in source
        assert "field(" not in source
        assert "    note: str\n" in source

    def test_empty_class(self):
        assert render_class(ClassModel(class_name="empty")) == "@dataclass\nclass empty:\n    pass\n"


class TestTopLevelMode:
    """Test standalone module output."""

    def test_orders_module(self, orders_model):
        source = render_class(orders_model, mode=WrapMode.TOP_LEVEL, namespace="sales")

        assert source == (
            '"""Generated models for sales."""\n'
            "\n"
            "from dataclasses import dataclass, field\n"
            "\n"
            "\n"
            + ORDERS_NESTED
        )

    def test_imports_follow_field_types(self):
        model = ClassModel(
            class_name="order_lines",
            fields=[
                FieldModel(name="order_id", target_type="int"),
                FieldModel(name="amount", target_type="Optional[decimal.Decimal]"),
                FieldModel(name="shipped_on", target_type="Optional[datetime.date]"),
            ],
        )

        source = render_class(model, mode=WrapMode.TOP_LEVEL)

        assert source.startswith(
            "import datetime\n"
            "import decimal\n"
            "from dataclasses import dataclass\n"
            "from typing import Optional\n"
            "\n"
            "\n"
            "@dataclass\n"
        )

    def test_field_import_only_with_attributes(self, orders_model):
        source = render_class(orders_model, mode=WrapMode.TOP_LEVEL, include_attributes=False)
        assert "from dataclasses import dataclass\n" in source
        assert "field" not in source.split("@dataclass")[0]


class TestAnnotations:
    """Test per-field comment lines."""

    def test_comment_order(self):
        model = ClassModel(
            class_name="accounts",
            fields=[
                FieldModel(
                    name="code",
                    target_type="str",
                    size_constraint=10,
                    is_primary_key=True,
                    has_unique_constraint=True,
                    unique_constraint="uq_accounts_code",
                    references="ref.codes.code",
                ),
            ],
        )

        lines = render_class(model).splitlines()

        assert lines[2:] == [
            "    # primary key column",
            "    # unique constraint uq_accounts_code",
            "    # references ref.codes.code",
            "    # max length 10",
            '    code: str = field(metadata={"max_length": 10})',
        ]

    def test_unnamed_unique_constraint(self):
        model = ClassModel(
            class_name="items",
            fields=[FieldModel(name="sku", target_type="str", has_unique_constraint=True)],
        )
        assert "    # unique constraint\n    sku: str\n" in render_class(model)

    def test_no_referencing_comment_when_empty(self):
        model = ClassModel(class_name="t", fields=[FieldModel(name="a", target_type="int")])
        assert "referencing tables" not in render_class(model)

    def test_deterministic(self, orders_model):
        first = render_class(orders_model, mode=WrapMode.TOP_LEVEL, namespace="sales")
        second = render_class(orders_model, mode=WrapMode.TOP_LEVEL, namespace="sales")
        assert first == second


class TestIdentifiers:
    """Test names that are not valid Python identifiers."""

    @pytest.mark.parametrize("name, expected", [
        ("order_date", "order_date"),
        ("order date", "order_date"),
        ("unit-price", "unit_price"),
        ("class", "class_"),
        ("2nd_line", "_2nd_line"),
    ])
    def test_python_identifier(self, name, expected):
        assert python_identifier(name) == expected

    def test_renamed_field_keeps_column_comment(self):
        model = ClassModel(
            class_name="order lines",
            fields=[
                FieldModel(name="class", target_type="str", is_primary_key=True),
                FieldModel(name="order date", target_type="Optional[datetime.date]"),
            ],
        )

        assert render_class(model) == (
            "@dataclass\n"
            "class order_lines:\n"
            "    # column 'class'\n"
            "    # primary key column\n"
            "    class_: str\n"
            "    # column 'order date'\n"
            "    order_date: Optional[datetime.date]\n"
        )
