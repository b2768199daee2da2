"""Argument validation and coercion against an operation's parameter schema.

Callers (usually an LLM) send loosely typed JSON: ids as strings, flags as
``"true"``, lists as comma separated text.  This module turns such a raw
mapping into the typed mapping the operation expects, or rejects it with
an error that names the offending parameter.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from testrail_mcp.errors import InvalidArgumentError, MissingRequiredArgumentError
from testrail_mcp.gateway.catalog import OperationDescriptor, ParameterDescriptor, SemanticType

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "y", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "n", "off", "0"})

_PRIMITIVES = (str, int, float, bool)

_ID_PREFIX_RE = re.compile(r"^[A-Za-z](?=\d)")


def _fail(p: ParameterDescriptor, value: Any, reason: Optional[str] = None) -> InvalidArgumentError:
    return InvalidArgumentError(p.name, p.type.value, value, reason=reason)


def _to_int(p: ParameterDescriptor, value: Any) -> int:
    if isinstance(value, bool):
        raise _fail(p, value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise _fail(p, value, "not a whole number")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            as_float = float(text)
        except ValueError:
            raise _fail(p, value) from None
        if math.isfinite(as_float) and as_float.is_integer():
            return int(as_float)
        raise _fail(p, value, "not a whole number")
    raise _fail(p, value)


def _to_float(p: ParameterDescriptor, value: Any) -> float:
    if isinstance(value, bool):
        raise _fail(p, value)
    if not isinstance(value, (int, float, str)):
        raise _fail(p, value)
    try:
        result = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        raise _fail(p, value) from None
    if not math.isfinite(result):
        raise _fail(p, value, "not a finite number")
    return result


def _to_bool(p: ParameterDescriptor, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise _fail(p, value)


def _to_str(p: ParameterDescriptor, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise _fail(p, value)


def _split_list(p: ParameterDescriptor, value: Any) -> List[Any]:
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except ValueError:
                raise _fail(p, value, "malformed JSON array") from None
        elif not text:
            return []
        else:
            return [item.strip() for item in text.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        for item in value:
            if item is not None and not isinstance(item, _PRIMITIVES):
                raise _fail(p, value, "list items must be primitive values")
        return list(value)
    if isinstance(value, _PRIMITIVES):
        return [value]
    raise _fail(p, value)


def _to_list(p: ParameterDescriptor, value: Any) -> List[Any]:
    items = _split_list(p, value)
    if p.items is None:
        return items

    item_param = replace(p, type=p.items, items=None)
    coerced = []
    for item in items:
        # Integer ids may carry a TestRail prefix: C12, R3, T7.
        if p.items is SemanticType.INTEGER and isinstance(item, str):
            item = _ID_PREFIX_RE.sub("", item.strip())
        try:
            coerced.append(_COERCERS[p.items](item_param, item))
        except InvalidArgumentError:
            raise _fail(p, value, f"item {item!r} is not a valid {p.items.value}") from None
    return coerced


def _to_object(p: ParameterDescriptor, value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            raise _fail(p, value, "malformed JSON object") from None
        if isinstance(decoded, dict):
            return decoded
    raise _fail(p, value)


_COERCERS = {
    SemanticType.INTEGER: _to_int,
    SemanticType.FLOAT: _to_float,
    SemanticType.BOOLEAN: _to_bool,
    SemanticType.STRING: _to_str,
    SemanticType.LIST: _to_list,
    SemanticType.OBJECT: _to_object,
}


def coerce_value(p: ParameterDescriptor, value: Any) -> Any:
    """Convert *value* to the semantic type declared by *p*.

    Raises :class:`InvalidArgumentError` when no sensible conversion exists.
    """
    return _COERCERS[p.type](p, value)


def validate_arguments(
    descriptor: OperationDescriptor,
    raw_arguments: Optional[Mapping[str, Any]],
) -> Mapping[str, Any]:
    """Validate *raw_arguments* against *descriptor* and return typed values.

    Parameters are processed in declaration order and the first failure is
    raised.  Undeclared keys are ignored; ``None`` counts as not provided.
    The returned mapping is read-only.
    """
    raw = raw_arguments or {}
    coerced: Dict[str, Any] = {}

    for p in descriptor.parameters:
        value = raw.get(p.name)
        try:
            if value is not None:
                coerced[p.name] = coerce_value(p, value)
            elif p.default is not None:
                coerced[p.name] = coerce_value(p, p.default)
            elif p.required:
                raise MissingRequiredArgumentError(p.name, descriptor.name)
        except (InvalidArgumentError, MissingRequiredArgumentError) as exc:
            exc.operation_name = descriptor.name
            raise

    ignored = [k for k in raw if descriptor.get_parameter(k) is None]
    if ignored:
        logger.debug("Tool '%s': ignoring undeclared arguments %s", descriptor.name, ignored)
    return MappingProxyType(coerced)
