"""
SPARQL query builders for the KNL, JPSearch and NDL endpoints.
"""

from . import jpsearch, knl, ndl
from .query_sets import QUERY_SETS
from .registry import TEMPLATE_REGISTRY, all_templates, get_template, normalize_family, render_query
from .templates import EndpointFamily, QueryResult, QueryTemplate

__all__ = [
    "EndpointFamily",
    "QUERY_SETS",
    "QueryResult",
    "QueryTemplate",
    "TEMPLATE_REGISTRY",
    "all_templates",
    "get_template",
    "jpsearch",
    "knl",
    "ndl",
    "normalize_family",
    "render_query",
]
