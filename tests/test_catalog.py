"""Tests for the operation catalog."""

from __future__ import annotations

import pytest

from testrail_mcp import errors
from testrail_mcp.gateway.catalog import (
    OperationCatalog,
    OperationDescriptor,
    ParameterDescriptor,
    SemanticType,
    param,
)


def _noop(args):
    return dict(args)


def _descriptor(name: str, *params: ParameterDescriptor, **kwargs) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        description=kwargs.pop("description", f"Operation {name}"),
        category=kwargs.pop("category", "misc"),
        invoke=kwargs.pop("invoke", _noop),
        parameters=params,
        **kwargs,
    )


class TestRegistration:
    def test_get_returns_registered_descriptor(self) -> None:
        catalog = OperationCatalog()
        d = _descriptor("get_widget")
        catalog.register(d)
        assert catalog.get("get_widget") is d
        assert "get_widget" in catalog
        assert len(catalog) == 1

    def test_get_unknown_returns_none(self) -> None:
        assert OperationCatalog().get("nope") is None

    def test_registration_order_preserved(self) -> None:
        catalog = OperationCatalog()
        catalog.register_all([_descriptor("b"), _descriptor("a"), _descriptor("c")])
        assert catalog.names == ["b", "a", "c"]
        assert [d.name for d in catalog] == ["b", "a", "c"]
        assert catalog.position("a") == 1

    def test_duplicate_name_rejected_and_catalog_unchanged(self) -> None:
        catalog = OperationCatalog()
        first = _descriptor("get_widget")
        catalog.register(first)
        with pytest.raises(errors.DuplicateOperationError) as exc_info:
            catalog.register(_descriptor("get_widget", description="other"))
        assert exc_info.value.operation_name == "get_widget"
        assert catalog.get("get_widget") is first
        assert len(catalog) == 1

    def test_register_after_freeze_rejected(self) -> None:
        catalog = OperationCatalog()
        catalog.register(_descriptor("a"))
        catalog.freeze()
        assert catalog.frozen
        with pytest.raises(errors.CatalogFrozenError):
            catalog.register(_descriptor("b"))
        assert catalog.names == ["a"]


class TestDescriptorChecks:
    def test_blank_name_rejected(self) -> None:
        with pytest.raises(errors.InvalidDescriptorError):
            OperationCatalog().register(_descriptor("  "))

    def test_non_callable_invoke_rejected(self) -> None:
        with pytest.raises(errors.InvalidDescriptorError):
            OperationCatalog().register(_descriptor("x", invoke="not callable"))

    def test_duplicate_parameter_rejected(self) -> None:
        d = _descriptor("x", param("id", type=SemanticType.INTEGER), param("id"))
        with pytest.raises(errors.InvalidDescriptorError) as exc_info:
            OperationCatalog().register(d)
        assert exc_info.value.parameter == "id"

    def test_invalid_default_rejected(self) -> None:
        d = _descriptor("x", param("n", type=SemanticType.INTEGER, required=False, default="many"))
        with pytest.raises(errors.InvalidDescriptorError):
            OperationCatalog().register(d)


class TestDescriptorSerialisation:
    def test_sequences_stored_as_tuples(self) -> None:
        d = _descriptor("x", keywords=["a", "b"], examples=["ex"])
        assert d.keywords == ("a", "b")
        assert d.examples == ("ex",)

    def test_summary_fields(self) -> None:
        d = _descriptor("get_widget", examples=("execute_tool('get_widget', {widgetId: 1})",))
        assert d.summary() == {
            "name": "get_widget",
            "description": "Operation get_widget",
            "category": "misc",
            "examples": ["execute_tool('get_widget', {widgetId: 1})"],
        }

    def test_full_details_include_parameters(self) -> None:
        d = _descriptor(
            "get_widget",
            param("widgetId", "Widget id", SemanticType.INTEGER),
            param("verbose", "Verbose", SemanticType.BOOLEAN, required=False, default="false"),
            keywords=("widget",),
        )
        details = d.to_full_details()
        assert details["keywords"] == ["widget"]
        assert details["parameters"] == [
            {"name": "widgetId", "type": "integer", "description": "Widget id", "required": True},
            {
                "name": "verbose",
                "type": "boolean",
                "description": "Verbose",
                "required": False,
                "defaultValue": "false",
            },
        ]

    def test_get_parameter(self) -> None:
        d = _descriptor("x", param("a"), param("b"))
        assert d.get_parameter("b").name == "b"
        assert d.get_parameter("c") is None
