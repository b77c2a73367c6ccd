"""
Centralized (family, operation) -> template table, built once at import.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from biblio_relay.queries import jpsearch, knl, ndl
from biblio_relay.queries.templates import EndpointFamily, QueryResult, QueryTemplate, build_registry

TEMPLATE_REGISTRY: Mapping[Tuple[EndpointFamily, str], QueryTemplate] = build_registry(
    (*jpsearch.TEMPLATES, *ndl.TEMPLATES, *knl.TEMPLATES)
)

FAMILY_ALIASES = {
    "knl": EndpointFamily.KNL,
    "korea": EndpointFamily.KNL,
    "jpsearch": EndpointFamily.JPSEARCH,
    "jp_search": EndpointFamily.JPSEARCH,
    "japan_search": EndpointFamily.JPSEARCH,
    "ndl": EndpointFamily.NDL,
}


def normalize_family(value: Any, *, default: EndpointFamily = EndpointFamily.UNKNOWN) -> EndpointFamily:
    if isinstance(value, EndpointFamily):
        return value
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        return default
    if text in EndpointFamily._value2member_map_:
        return EndpointFamily(text)
    return FAMILY_ALIASES.get(text.lower(), default)


def get_template(family: EndpointFamily | str, operation: str) -> QueryTemplate:
    key = (normalize_family(family), operation)
    try:
        return TEMPLATE_REGISTRY[key]
    except KeyError as exc:
        raise KeyError(f"No query template registered for {key[0].value}.{operation}") from exc


def render_query(family: EndpointFamily | str, operation: str, *args: Any) -> QueryResult:
    return get_template(family, operation).render(*args)


def all_templates() -> List[QueryTemplate]:
    return list(TEMPLATE_REGISTRY.values())


__all__ = [
    "FAMILY_ALIASES",
    "TEMPLATE_REGISTRY",
    "all_templates",
    "get_template",
    "normalize_family",
    "render_query",
]
