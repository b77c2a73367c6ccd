"""
Rule-based classification of SPARQL text by endpoint family.

All helpers are pure functions of the query text. Rules and extraction
patterns are evaluated in a fixed order and the first match wins: KNL before
JPSearch before NDL, role-specific author bindings before namespace
fallbacks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from biblio_relay.queries.templates import EndpointFamily

UNKNOWN_QUERY_TYPE = "Unknown Query Type"

_KNL_MARKERS = ("nlon:", "lod.nl.go.kr")
_JPSEARCH_MARKER = "schema:creator"
_NDL_MARKER = "foaf:Person"

_AUTHOR_ID_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\?\w+\s+schema:creator\s+<([^>]+)>"),
    re.compile(r"\?\w+\s+dcterms:creator\s+<([^>]+)>"),
    re.compile(r"VALUES\s+\?\w+\s+\{\s*<([^>]+)>"),
    re.compile(r"<(http://id\.ndl\.go\.jp/auth/entity/[^>]+)>"),
    re.compile(r"<(http://lod\.nl\.go\.kr/resource/[^>]+)>"),
)


def is_knl_query(query: str) -> bool:
    return any(marker in query for marker in _KNL_MARKERS)


def is_jpsearch_query(query: str) -> bool:
    # Defined by exclusion: a text carrying both markers is KNL.
    return _JPSEARCH_MARKER in query and not is_knl_query(query)


@dataclass(frozen=True)
class ClassificationRule:
    label: str
    family: EndpointFamily
    predicate: Callable[[str], bool]

    def matches(self, query: str) -> bool:
        return self.predicate(query)


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        label="KNL Works Search",
        family=EndpointFamily.KNL,
        predicate=lambda q: is_knl_query(q) and "dcterms:creator" in q,
    ),
    ClassificationRule(
        label="KNL Author Search",
        family=EndpointFamily.KNL,
        predicate=lambda q: is_knl_query(q) and "nlon:Author" in q,
    ),
    ClassificationRule(label="KNL Query", family=EndpointFamily.KNL, predicate=is_knl_query),
    ClassificationRule(
        label="JPSearch Works Search",
        family=EndpointFamily.JPSEARCH,
        predicate=is_jpsearch_query,
    ),
    ClassificationRule(
        label="NDL Author Search",
        family=EndpointFamily.NDL,
        predicate=lambda q: _NDL_MARKER in q,
    ),
)


@dataclass(frozen=True)
class ClassifiedQuery:
    family: EndpointFamily = EndpointFamily.UNKNOWN
    query_type: str = UNKNOWN_QUERY_TYPE
    extracted_id: Optional[str] = None


def match_rule(query: str, rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> Optional[ClassificationRule]:
    for rule in rules:
        if rule.matches(query):
            return rule
    return None


def get_query_type(query: str) -> str:
    rule = match_rule(query)
    return rule.label if rule else UNKNOWN_QUERY_TYPE


def extract_author_id(query: str) -> Optional[str]:
    for pattern in _AUTHOR_ID_PATTERNS:
        match = pattern.search(query)
        if match:
            return match.group(1)
    return None


def validate_query(query: str, required_vars: Iterable[str] = ()) -> bool:
    return all(f"?{name}" in query for name in required_vars)


def classify(query: str) -> ClassifiedQuery:
    rule = match_rule(query)
    if rule is None:
        return ClassifiedQuery(extracted_id=extract_author_id(query))
    return ClassifiedQuery(family=rule.family, query_type=rule.label, extracted_id=extract_author_id(query))


__all__ = [
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "ClassifiedQuery",
    "UNKNOWN_QUERY_TYPE",
    "classify",
    "extract_author_id",
    "get_query_type",
    "is_jpsearch_query",
    "is_knl_query",
    "match_rule",
    "validate_query",
]
