"""
National Diet Library (NDL) authority templates, typed as foaf:Person.

Names are interpolated as-is into a quoted literal; callers must reject
names containing double quotes or backslashes beforehand.
"""

from __future__ import annotations

from biblio_relay.queries.templates import EndpointFamily, QueryResult, QueryTemplate

FAMILY = EndpointFamily.NDL


def author_by_name(author_name: str) -> QueryResult:
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX foaf: <http://xmlns.com/foaf/0.1/>
SELECT DISTINCT ?s ?label WHERE {{
  ?s rdf:type foaf:Person .
  ?s rdfs:label ?label .
  FILTER(?label = "{author_name}")
}}
LIMIT 20""")


def author_by_name_contains(author_name: str) -> QueryResult:
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX foaf: <http://xmlns.com/foaf/0.1/>
SELECT DISTINCT ?s ?label WHERE {{
  ?s rdf:type foaf:Person .
  ?s rdfs:label ?label .
  FILTER(CONTAINS(?label, "{author_name}"))
}}
LIMIT 20""")


TEMPLATES = (
    QueryTemplate(
        family=FAMILY,
        operation="author_by_name",
        description="Persons whose label equals the given name.",
        builder=author_by_name,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="author_by_name_contains",
        description="Persons whose label contains the given name.",
        builder=author_by_name_contains,
    ),
)


__all__ = ["FAMILY", "TEMPLATES", "author_by_name", "author_by_name_contains"]
