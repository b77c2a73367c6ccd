"""
Endpoint-family classification helpers for SPARQL text.
"""

from .layer import (
    CLASSIFICATION_RULES,
    UNKNOWN_QUERY_TYPE,
    ClassificationRule,
    ClassifiedQuery,
    classify,
    extract_author_id,
    get_query_type,
    is_jpsearch_query,
    is_knl_query,
    validate_query,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "UNKNOWN_QUERY_TYPE",
    "ClassificationRule",
    "ClassifiedQuery",
    "classify",
    "extract_author_id",
    "get_query_type",
    "is_jpsearch_query",
    "is_knl_query",
    "validate_query",
]
