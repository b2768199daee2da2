"""Per-call request and result records of the tool gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from testrail_mcp.errors import GatewayError


@dataclass(frozen=True)
class InvocationRequest:
    operation_name: str
    raw_arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class InvocationFailure:
    kind: str
    message: str
    operation_name: Optional[str] = None
    parameter: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: GatewayError) -> "InvocationFailure":
        return cls(
            kind=exc.kind,
            message=exc.message,
            operation_name=exc.operation_name,
            parameter=exc.parameter,
            details=exc.details(),
        )

    def to_dict(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.operation_name:
            info["operationName"] = self.operation_name
        if self.parameter:
            info["parameter"] = self.parameter
        info.update(self.details)
        return info


@dataclass(frozen=True)
class InvocationResult:
    """Either the callable's return value or a structured failure."""

    operation_name: str
    value: Any = None
    failure: Optional[InvocationFailure] = None

    @classmethod
    def success(cls, operation_name: str, value: Any) -> "InvocationResult":
        return cls(operation_name=operation_name, value=value)

    @classmethod
    def from_error(cls, operation_name: str, exc: GatewayError) -> "InvocationResult":
        return cls(operation_name=operation_name, failure=InvocationFailure.from_error(exc))

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> Optional[str]:
        return self.failure.kind if self.failure else None

    def to_dict(self) -> Dict[str, Any]:
        if self.failure is None:
            return {"tool": self.operation_name, "success": True, "result": self.value}
        return {
            "tool": self.operation_name,
            "success": False,
            "error": self.failure.to_dict(),
        }
