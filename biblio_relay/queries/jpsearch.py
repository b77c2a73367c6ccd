"""
Japan Search (JPSearch) templates: works linked to an author through schema:creator.
"""

from __future__ import annotations

from biblio_relay.queries.templates import (
    EndpointFamily,
    QueryResult,
    QueryTemplate,
    invalid_parameter,
    is_invalid_identifier,
)

FAMILY = EndpointFamily.JPSEARCH


def works_by_author(author_id: str | None) -> QueryResult:
    if is_invalid_identifier(author_id):
        return invalid_parameter(FAMILY, "works_by_author", author_id)
    return QueryResult(query=f"""
PREFIX schema: <http://schema.org/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
SELECT DISTINCT ?s ?o ?d ?link WHERE {{
  ?s schema:creator <{author_id}> .
  ?s rdfs:label ?o .
  OPTIONAL {{ ?s schema:datePublished ?d }}
  OPTIONAL {{ ?s schema:url ?link }}
}}
ORDER BY ?d ?o
LIMIT 50""")


def works_with_metadata(author_id: str | None) -> QueryResult:
    if is_invalid_identifier(author_id):
        return invalid_parameter(FAMILY, "works_with_metadata", author_id)
    return QueryResult(query=f"""
PREFIX schema: <http://schema.org/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX dcterms: <http://purl.org/dc/terms/>
SELECT DISTINCT ?s ?title ?date ?link ?publisher ?isbn WHERE {{
  ?s schema:creator <{author_id}> .
  ?s rdfs:label ?title .
  OPTIONAL {{ ?s schema:datePublished ?date }}
  OPTIONAL {{ ?s schema:url ?link }}
  OPTIONAL {{ ?s schema:publisher ?publisher }}
  OPTIONAL {{ ?s schema:isbn ?isbn }}
}}
ORDER BY ?date ?title
LIMIT 50""")


TEMPLATES = (
    QueryTemplate(
        family=FAMILY,
        operation="works_by_author",
        description="Works whose schema:creator is the given author URI.",
        builder=works_by_author,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="works_with_metadata",
        description="Works by author with publication date, link, publisher and ISBN.",
        builder=works_with_metadata,
    ),
)


__all__ = ["FAMILY", "TEMPLATES", "works_by_author", "works_with_metadata"]
