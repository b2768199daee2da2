"""Custom exception classes for TestRail MCP."""

from typing import Any, Dict, Optional


class TestrailMcpError(Exception):
    """Base class for all custom exceptions in TestRail MCP."""

    pass


class ConfigurationError(TestrailMcpError):
    """Raised when loading or validating the configuration file fails."""

    pass


class TestrailApiError(TestrailMcpError):
    """
    Raised when a call to the TestRail REST API fails, either because the
    server answered with an error status or because the request never
    completed.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        """TestRail reports missing entities as 400 with a message, or 404."""
        if self.status_code == 404:
            return True
        body = (self.response_body or "").lower()
        return self.status_code == 400 and ("not found" in body or "does not exist" in body)

    @property
    def is_authentication_error(self) -> bool:
        return self.status_code in (401, 403)


# ── Gateway errors ───────────────────────────────────────────────────────


class GatewayError(TestrailMcpError):
    """
    Base class for tool gateway failures.

    ``kind`` is the stable, caller-visible name of the failure; callers
    branch on it rather than on the Python class.
    """

    kind = "GatewayError"

    def __init__(
        self,
        message: str,
        operation_name: Optional[str] = None,
        parameter: Optional[str] = None,
    ):
        self.message = message
        self.operation_name = operation_name
        self.parameter = parameter
        super().__init__(message)

    def details(self) -> Dict[str, Any]:
        """Extra structured fields carried into the invocation result."""
        return {}


class DuplicateOperationError(GatewayError):
    """Raised at startup when two operations share a name."""

    kind = "DuplicateOperationError"

    def __init__(self, name: str):
        super().__init__(
            f"Operation '{name}' is already registered. Operation names must be unique.",
            operation_name=name,
        )


class CatalogFrozenError(GatewayError):
    """Raised when registration is attempted after the catalog was frozen."""

    kind = "CatalogFrozenError"

    def __init__(self, name: str):
        super().__init__(
            f"Cannot register '{name}': the operation catalog is read-only after startup.",
            operation_name=name,
        )


class InvalidDescriptorError(GatewayError):
    """Raised at startup when an operation descriptor is malformed."""

    kind = "InvalidDescriptorError"


class UnknownOperationError(GatewayError):
    kind = "UnknownOperationError"

    def __init__(self, name: str):
        super().__init__(
            f"Tool not found: '{name}'. Use search_tools to find available tools.",
            operation_name=name,
        )


class MissingRequiredArgumentError(GatewayError):
    kind = "MissingRequiredArgumentError"

    def __init__(self, parameter: str, operation_name: Optional[str] = None):
        message = f"Required parameter '{parameter}' is missing"
        if operation_name:
            message += f" for tool '{operation_name}'"
        super().__init__(message, operation_name=operation_name, parameter=parameter)


class InvalidArgumentError(GatewayError):
    kind = "InvalidArgumentError"

    def __init__(
        self,
        parameter: str,
        expected_type: str,
        received_value: Any,
        operation_name: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.expected_type = expected_type
        self.received_value = received_value
        message = (
            f"Cannot convert parameter '{parameter}' value {received_value!r} "
            f"({type(received_value).__name__}) to {expected_type}"
        )
        if reason:
            message += f": {reason}"
        super().__init__(message, operation_name=operation_name, parameter=parameter)

    def details(self) -> Dict[str, Any]:
        return {
            "expectedType": self.expected_type,
            "receivedValue": self.received_value,
        }


class DownstreamError(GatewayError):
    """Wraps any failure raised by an operation's underlying callable."""

    kind = "DownstreamError"

    def __init__(self, name: str, cause: BaseException):
        self.cause = cause
        cause_msg = str(cause) or type(cause).__name__
        super().__init__(
            f"Tool '{name}' failed: {cause_msg}",
            operation_name=name,
        )

    def details(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {"cause": type(self.cause).__name__}
        status_code = getattr(self.cause, "status_code", 0)
        if status_code:
            info["statusCode"] = status_code
        return info


class InvocationTimeoutError(GatewayError):
    """The caller-level timeout expired before the operation finished."""

    kind = "TimeoutError"

    def __init__(self, name: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Tool '{name}' did not finish within {timeout:g} seconds.",
            operation_name=name,
        )

    def details(self) -> Dict[str, Any]:
        return {"timeoutSeconds": self.timeout}
