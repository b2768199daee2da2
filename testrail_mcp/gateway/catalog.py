"""Operation catalog - the registry of every internal operation.

Each operation is described by an :class:`OperationDescriptor` carrying its
searchable text (name, description, category, keywords, examples), its
parameter schema and the callable that implements it.  The catalog is filled
once at startup, frozen, and read concurrently afterwards.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from testrail_mcp.errors import (
    CatalogFrozenError,
    DuplicateOperationError,
    GatewayError,
    InvalidDescriptorError,
)

logger = logging.getLogger(__name__)

# The underlying callable: receives the coerced argument mapping and returns
# the result (or an awaitable of it).  Failures are raised.
Invoker = Callable[[Mapping[str, Any]], Any]


class SemanticType(str, enum.Enum):
    """Declared type of a parameter, used for coercion."""

    INTEGER = "integer"
    FLOAT = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    LIST = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    description: str = ""
    type: SemanticType = SemanticType.STRING
    required: bool = True
    default: Optional[str] = None
    # Element type of a LIST parameter; items are coerced when set.
    items: Optional[SemanticType] = None

    def to_dict(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "required": self.required,
        }
        if self.default is not None:
            info["defaultValue"] = self.default
        if self.items is not None:
            info["items"] = self.items.value
        return info


def param(
    name: str,
    description: str = "",
    type: SemanticType = SemanticType.STRING,
    *,
    required: bool = True,
    default: Optional[str] = None,
    items: Optional[SemanticType] = None,
) -> ParameterDescriptor:
    """Shorthand used by the operation modules to declare a parameter."""
    return ParameterDescriptor(
        name=name,
        description=description,
        type=type,
        required=required,
        default=default,
        items=items,
    )


@dataclass(frozen=True)
class OperationDescriptor:
    """Static metadata for one internal operation."""

    name: str
    description: str
    category: str
    invoke: Invoker = field(repr=False, compare=False)
    keywords: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    parameters: Tuple[ParameterDescriptor, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but store immutable tuples.
        object.__setattr__(self, "keywords", tuple(self.keywords))
        object.__setattr__(self, "examples", tuple(self.examples))
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def get_parameter(self, name: str) -> Optional[ParameterDescriptor]:
        for p in self.parameters:
            if p.name == name:
                return p
        return None

    def summary(self) -> Dict[str, Any]:
        """The fields a caller needs to decide what to invoke."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "examples": list(self.examples),
        }

    def to_full_details(self) -> Dict[str, Any]:
        """Summary plus keywords and the parameter schema."""
        details = self.summary()
        details["keywords"] = list(self.keywords)
        details["parameters"] = [p.to_dict() for p in self.parameters]
        return details


def _check_descriptor(descriptor: OperationDescriptor) -> None:
    """Fail fast on descriptors that could never be dispatched correctly."""
    from testrail_mcp.gateway.coercion import coerce_value

    if not descriptor.name or not descriptor.name.strip():
        raise InvalidDescriptorError("Operation name must be a non-empty string")
    if not callable(descriptor.invoke):
        raise InvalidDescriptorError(
            f"Operation '{descriptor.name}' has no callable invoke",
            operation_name=descriptor.name,
        )

    seen = set()
    for p in descriptor.parameters:
        if p.name in seen:
            raise InvalidDescriptorError(
                f"Operation '{descriptor.name}' declares parameter '{p.name}' twice",
                operation_name=descriptor.name,
                parameter=p.name,
            )
        seen.add(p.name)
        if p.default is not None:
            try:
                coerce_value(p, p.default)
            except GatewayError as exc:
                raise InvalidDescriptorError(
                    f"Default value of '{descriptor.name}.{p.name}' is invalid: {exc}",
                    operation_name=descriptor.name,
                    parameter=p.name,
                ) from exc


class OperationCatalog:
    """Authoritative, ordered set of operation descriptors.

    Iteration order equals registration order; the search index relies on
    it for deterministic tie-breaking.
    """

    def __init__(self) -> None:
        self._by_name: Dict[str, OperationDescriptor] = {}
        self._order: Dict[str, int] = {}
        self._frozen = False

    # ── Registration ─────────────────────────────────────────────────

    def register(self, descriptor: OperationDescriptor) -> None:
        """Add *descriptor*; duplicates leave the catalog unchanged."""
        if self._frozen:
            raise CatalogFrozenError(descriptor.name)
        if descriptor.name in self._by_name:
            raise DuplicateOperationError(descriptor.name)
        _check_descriptor(descriptor)

        self._order[descriptor.name] = len(self._by_name)
        self._by_name[descriptor.name] = descriptor
        logger.debug(
            "Registered tool: %s (category: %s, params: %d)",
            descriptor.name,
            descriptor.category,
            len(descriptor.parameters),
        )

    def register_all(self, descriptors: Sequence[OperationDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def freeze(self) -> None:
        """End the registration phase."""
        self._frozen = True
        logger.info("Operation catalog frozen with %d tools", len(self._by_name))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookup ───────────────────────────────────────────────────────

    def get(self, name: str) -> Optional[OperationDescriptor]:
        """Exact lookup by name; ``None`` when absent."""
        return self._by_name.get(name)

    def all(self) -> List[OperationDescriptor]:
        return list(self._by_name.values())

    def position(self, name: str) -> int:
        """Registration index of *name* (used as a tie-break)."""
        return self._order[name]

    @property
    def names(self) -> List[str]:
        return list(self._by_name.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._by_name)
