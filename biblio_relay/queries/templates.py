"""
Query template primitives and the read-only (family, operation) registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from biblio_relay.errors import TemplateParameterError

logger = logging.getLogger(__name__)

INVALID_IDENTIFIERS = frozenset({"", "undefined", "null"})


class EndpointFamily(str, Enum):
    KNL = "KNL"
    JPSEARCH = "JPSearch"
    NDL = "NDL"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of rendering a template: the query text, or the error that
    replaced it. `text` always yields a string so callers that forward it
    verbatim keep working; a failed result yields its sentinel.
    """

    query: Optional[str] = None
    error: Optional[TemplateParameterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        if self.error is not None:
            return self.error.sentinel
        return self.query or ""

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class QueryTemplate:
    family: EndpointFamily
    operation: str
    description: str
    builder: Callable[..., QueryResult]

    def render(self, *args: Any) -> QueryResult:
        return self.builder(*args)

    def __call__(self, *args: Any) -> str:
        return self.render(*args).text


def _camel_case(operation: str) -> str:
    head, *rest = operation.split("_")
    return head + "".join(part.capitalize() for part in rest)


def sentinel_for(family: EndpointFamily, operation: str, parameter: str = "author ID") -> str:
    # Upstream harnesses match this text, so keep the camelCase operation name.
    return f"-- ERROR: Invalid {parameter} provided to {family.value} {_camel_case(operation)} query --"


def is_invalid_identifier(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip() in INVALID_IDENTIFIERS


def invalid_parameter(
    family: EndpointFamily,
    operation: str,
    value: Any,
    *,
    parameter: str = "author ID",
) -> QueryResult:
    logger.warning("%s %s called with invalid %s: %r", family.value, operation, parameter, value)
    error = TemplateParameterError(
        family=family.value,
        operation=operation,
        parameter=parameter,
        value=value,
        sentinel=sentinel_for(family, operation, parameter),
    )
    return QueryResult(error=error)


def build_registry(templates: Iterable[QueryTemplate]) -> Mapping[Tuple[EndpointFamily, str], QueryTemplate]:
    table = {}
    for template in templates:
        key = (template.family, template.operation)
        if key in table:
            raise ValueError(f"Duplicate query template {template.family.value}.{template.operation}")
        table[key] = template
    return MappingProxyType(table)


__all__ = [
    "EndpointFamily",
    "INVALID_IDENTIFIERS",
    "QueryResult",
    "QueryTemplate",
    "build_registry",
    "invalid_parameter",
    "is_invalid_identifier",
    "sentinel_for",
]
