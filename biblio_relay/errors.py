"""
Error primitives shared by the relay and the query builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorType(str, Enum):
    MISSING_URL = "missing_url"
    UPSTREAM_TRANSPORT = "upstream_transport"
    INVALID_TEMPLATE_PARAMETER = "invalid_template_parameter"


@dataclass(eq=False)
class RelayError(Exception):
    message: str
    error_type: ErrorType = ErrorType.UPSTREAM_TRANSPORT
    status_code: int = 500

    def __str__(self) -> str:
        return self.message

    def to_text(self) -> str:
        return self.message


@dataclass(eq=False)
class ClientInputError(RelayError):
    """Missing target; answered immediately with a 4xx."""

    error_type: ErrorType = ErrorType.MISSING_URL
    status_code: int = 400


@dataclass(eq=False)
class UpstreamTransportError(RelayError):
    """DNS, TLS, connect or reset failure while talking to the target."""

    error_type: ErrorType = ErrorType.UPSTREAM_TRANSPORT
    status_code: int = 500

    def to_text(self) -> str:
        return f"Proxy error: {self.message}"


@dataclass(frozen=True)
class TemplateParameterError:
    """
    Invalid builder argument. Never raised: carried by a failed QueryResult
    together with the sentinel text that stands in for the query.
    """

    family: str
    operation: str
    parameter: str
    value: Any
    sentinel: str
    error_type: ErrorType = ErrorType.INVALID_TEMPLATE_PARAMETER

    @property
    def message(self) -> str:
        return f"Invalid {self.parameter} provided to {self.family} {self.operation}: {self.value!r}"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "error_type": self.error_type.value,
            "details": {"family": self.family, "operation": self.operation},
        }


__all__ = [
    "ClientInputError",
    "ErrorType",
    "RelayError",
    "TemplateParameterError",
    "UpstreamTransportError",
]
