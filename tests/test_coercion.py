"""Tests for argument validation and coercion."""

from __future__ import annotations

import pytest

from testrail_mcp import errors
from testrail_mcp.gateway.catalog import OperationDescriptor, SemanticType, param
from testrail_mcp.gateway.coercion import coerce_value, validate_arguments

INT = SemanticType.INTEGER
FLOAT = SemanticType.FLOAT
BOOL = SemanticType.BOOLEAN
STR = SemanticType.STRING
LIST = SemanticType.LIST
OBJ = SemanticType.OBJECT


def _p(type_: SemanticType):
    return param("value", type=type_)


class TestIntegerCoercion:
    @pytest.mark.parametrize("raw, expected", [(42, 42), ("42", 42), (" 7 ", 7), (3.0, 3), ("42.0", 42)])
    def test_accepts(self, raw, expected) -> None:
        assert coerce_value(_p(INT), raw) == expected

    @pytest.mark.parametrize("raw", ["abc", 3.5, "3.5", True, [1], {"a": 1}, "inf"])
    def test_rejects(self, raw) -> None:
        with pytest.raises(errors.InvalidArgumentError) as exc_info:
            coerce_value(_p(INT), raw)
        assert exc_info.value.parameter == "value"
        assert exc_info.value.details()["expectedType"] == "integer"


class TestFloatCoercion:
    def test_accepts_numbers_and_strings(self) -> None:
        assert coerce_value(_p(FLOAT), 2) == 2.0
        assert coerce_value(_p(FLOAT), "2.5") == 2.5

    def test_rejects_bool_and_text(self) -> None:
        for raw in (True, "x"):
            with pytest.raises(errors.InvalidArgumentError):
                coerce_value(_p(FLOAT), raw)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity", float("inf"), float("nan"), 10**400])
    def test_rejects_non_finite(self, raw) -> None:
        with pytest.raises(errors.InvalidArgumentError) as exc_info:
            coerce_value(_p(FLOAT), raw)
        assert exc_info.value.details()["expectedType"] == "number"


class TestBooleanCoercion:
    @pytest.mark.parametrize("raw", [True, "true", "TRUE", "yes", "1", 1, 2.5, "on"])
    def test_truthy(self, raw) -> None:
        assert coerce_value(_p(BOOL), raw) is True

    @pytest.mark.parametrize("raw", [False, "false", "No", "0", 0, "off"])
    def test_falsy(self, raw) -> None:
        assert coerce_value(_p(BOOL), raw) is False

    @pytest.mark.parametrize("raw", ["maybe", "", [True]])
    def test_rejects(self, raw) -> None:
        with pytest.raises(errors.InvalidArgumentError):
            coerce_value(_p(BOOL), raw)


class TestStringCoercion:
    def test_scalars(self) -> None:
        assert coerce_value(_p(STR), "x") == "x"
        assert coerce_value(_p(STR), 12) == "12"
        assert coerce_value(_p(STR), True) == "true"

    def test_rejects_structures(self) -> None:
        with pytest.raises(errors.InvalidArgumentError):
            coerce_value(_p(STR), {"a": 1})


class TestListCoercion:
    def test_comma_separated(self) -> None:
        assert coerce_value(_p(LIST), "1, 2,3") == ["1", "2", "3"]

    def test_json_array(self) -> None:
        assert coerce_value(_p(LIST), "[1, 2]") == [1, 2]

    def test_list_and_scalar(self) -> None:
        assert coerce_value(_p(LIST), (1, "a")) == [1, "a"]
        assert coerce_value(_p(LIST), 5) == [5]
        assert coerce_value(_p(LIST), "") == []

    def test_rejects_nested_structures(self) -> None:
        with pytest.raises(errors.InvalidArgumentError):
            coerce_value(_p(LIST), [{"a": 1}])

    def test_rejects_malformed_json(self) -> None:
        with pytest.raises(errors.InvalidArgumentError):
            coerce_value(_p(LIST), "[1, 2")


class TestIntegerListCoercion:
    def _ids(self):
        return param("caseIds", type=LIST, items=INT)

    def test_items_coerced(self) -> None:
        assert coerce_value(self._ids(), "C1, 2,r3") == [1, 2, 3]
        assert coerce_value(self._ids(), ["4", 5.0]) == [4, 5]
        assert coerce_value(self._ids(), "[6, 7]") == [6, 7]

    @pytest.mark.parametrize("raw", ["abc,def", "1,x", ["C"], [1.5]])
    def test_bad_item_names_list_parameter(self, raw) -> None:
        with pytest.raises(errors.InvalidArgumentError) as exc_info:
            coerce_value(self._ids(), raw)
        assert exc_info.value.parameter == "caseIds"
        assert exc_info.value.details()["expectedType"] == "array"

    def test_item_type_in_schema(self) -> None:
        assert self._ids().to_dict()["items"] == "integer"


class TestObjectCoercion:
    def test_mapping_and_json(self) -> None:
        assert coerce_value(_p(OBJ), {"a": 1}) == {"a": 1}
        assert coerce_value(_p(OBJ), '{"a": [1]}') == {"a": [1]}

    @pytest.mark.parametrize("raw", ["[1]", "nope", 3])
    def test_rejects(self, raw) -> None:
        with pytest.raises(errors.InvalidArgumentError):
            coerce_value(_p(OBJ), raw)


def _widget() -> OperationDescriptor:
    return OperationDescriptor(
        name="get_widget",
        description="Fetch a widget",
        category="widgets",
        invoke=lambda args: args,
        parameters=(
            param("widgetId", type=INT),
            param("verbose", type=BOOL, required=False, default="false"),
            param("label", type=STR, required=False),
        ),
    )


class TestValidateArguments:
    def test_widget_scenario(self) -> None:
        result = validate_arguments(_widget(), {"widgetId": "42"})
        assert dict(result) == {"widgetId": 42, "verbose": False}

    def test_optional_without_default_is_absent(self) -> None:
        assert "label" not in validate_arguments(_widget(), {"widgetId": 1})

    def test_default_equals_explicit_value(self) -> None:
        implicit = validate_arguments(_widget(), {"widgetId": 1})
        explicit = validate_arguments(_widget(), {"widgetId": 1, "verbose": "false"})
        assert dict(implicit) == dict(explicit)

    def test_none_counts_as_missing(self) -> None:
        with pytest.raises(errors.MissingRequiredArgumentError):
            validate_arguments(_widget(), {"widgetId": None})

    def test_missing_required_names_parameter(self) -> None:
        with pytest.raises(errors.MissingRequiredArgumentError) as exc_info:
            validate_arguments(_widget(), {})
        assert exc_info.value.parameter == "widgetId"
        assert exc_info.value.operation_name == "get_widget"

    def test_invalid_value_names_parameter_and_operation(self) -> None:
        with pytest.raises(errors.InvalidArgumentError) as exc_info:
            validate_arguments(_widget(), {"widgetId": "abc"})
        assert exc_info.value.parameter == "widgetId"
        assert exc_info.value.operation_name == "get_widget"
        assert exc_info.value.details()["receivedValue"] == "abc"

    def test_first_failure_in_declaration_order(self) -> None:
        with pytest.raises(errors.InvalidArgumentError) as exc_info:
            validate_arguments(_widget(), {"widgetId": "x", "verbose": "maybe"})
        assert exc_info.value.parameter == "widgetId"

    def test_extra_keys_ignored(self) -> None:
        result = validate_arguments(_widget(), {"widgetId": 1, "hint": "ignored"})
        assert "hint" not in result

    def test_result_is_read_only(self) -> None:
        result = validate_arguments(_widget(), {"widgetId": 1})
        with pytest.raises(TypeError):
            result["widgetId"] = 2  # type: ignore[index]
