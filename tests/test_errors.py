"""Tests for error codes and structured output."""

from model_class_builder.errors import (
    GenerationError,
    IntrospectionError,
    ModelBuilderError,
    UnsupportedTypeError,
)


class TestErrorCodes:
    """Test each error type reports its own code."""

    def test_codes(self):
        assert ModelBuilderError("x").code == "MODEL_BUILDER_ERROR"
        assert IntrospectionError("x").code == "INTROSPECTION_ERROR"
        assert UnsupportedTypeError("x").code == "UNSUPPORTED_TYPE"
        assert GenerationError("x").code == "GENERATION_ERROR"

    def test_subclasses_share_base(self):
        assert isinstance(GenerationError("x"), ModelBuilderError)


class TestToDict:
    """Test the dict form used for structured output."""

    def test_with_details(self):
        error = IntrospectionError("Table sales.x does not exist", details={"table": "x"})
        assert error.to_dict() == {
            "code": "INTROSPECTION_ERROR",
            "message": "Table sales.x does not exist",
            "details": {"table": "x"},
        }

    def test_empty_details_omitted(self):
        assert GenerationError("disk full").to_dict() == {
            "code": "GENERATION_ERROR",
            "message": "disk full",
        }

    def test_unsupported_type_details(self):
        error = UnsupportedTypeError("bad type", type_name="NullType")
        assert error.details == {"type": "NullType"}
        assert error.column is None
