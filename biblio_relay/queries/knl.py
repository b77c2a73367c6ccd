"""
Korean National Library (KNL) templates.

Works are reached through dcterms:creator, authors are typed nlon:Author.
Names are interpolated as-is into quoted literals (no escaping); callers
pre-validate them.
"""

from __future__ import annotations

from typing import Sequence

from biblio_relay.queries.templates import (
    EndpointFamily,
    QueryResult,
    QueryTemplate,
    invalid_parameter,
    is_invalid_identifier,
)

FAMILY = EndpointFamily.KNL

# String functions the KNL endpoint can be probed with for partial label matches.
LABEL_MATCH_FUNCTIONS = ("CONTAINS", "STRSTARTS", "STRENDS", "REGEX")


def works_by_author(author_id: str | None) -> QueryResult:
    if is_invalid_identifier(author_id):
        return invalid_parameter(FAMILY, "works_by_author", author_id)
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX dcterms: <http://purl.org/dc/terms/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX nlon: <http://lod.nl.go.kr/ontology/>
PREFIX bibo: <http://purl.org/ontology/bibo/>
SELECT ?work ?title ?issued ?isbn WHERE {{
    ?work dcterms:creator <{author_id}> ;
          dcterms:title ?title ;
          dcterms:issued ?issued .
    OPTIONAL {{ ?work bibo:isbn ?isbn }}
}}
ORDER BY ?issued ?title
LIMIT 50""")


def author_by_name(author_name: str) -> QueryResult:
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX nlon: <http://lod.nl.go.kr/ontology/>
SELECT DISTINCT ?s ?label WHERE {{
    ?s rdf:type nlon:Author .
    ?s rdfs:label ?label .
    FILTER(?label = "{author_name}")
}}
LIMIT 20""")


def multiple_authors(author_names: Sequence[str]) -> QueryResult:
    names = list(author_names or [])
    if not names:
        return invalid_parameter(FAMILY, "multiple_authors", author_names, parameter="author names")
    conditions = " || ".join(f'?label = "{name}"' for name in names)
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX nlon: <http://lod.nl.go.kr/ontology/>
SELECT ?s ?label WHERE {{
    ?s rdf:type nlon:Author .
    ?s rdfs:label ?label .
    FILTER({conditions})
}}
LIMIT 20""")


def author_details(author_id: str | None) -> QueryResult:
    if is_invalid_identifier(author_id):
        return invalid_parameter(FAMILY, "author_details", author_id)
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX nlon: <http://lod.nl.go.kr/ontology/>
PREFIX schema: <http://schema.org/>
PREFIX dc: <http://purl.org/dc/elements/1.1/>
SELECT DISTINCT ?s ?label ?jobTitle ?fieldOfActivity ?gender ?associatedLanguage WHERE {{
    VALUES ?s {{ <{author_id}> }}
    ?s rdf:type nlon:Author .
    ?s rdfs:label ?label .
    OPTIONAL {{ ?s schema:jobTitle ?jobTitle }}
    OPTIONAL {{ ?s nlon:fieldOfActivity ?fieldOfActivity }}
    OPTIONAL {{ ?s schema:gender ?gender }}
    OPTIONAL {{ ?s nlon:associatedLanguage ?associatedLanguage }}
}}
LIMIT 1""")


def author_by_name_match(author_name: str, function: str = "CONTAINS") -> QueryResult:
    """
    Partial label match using one of the SPARQL string functions in
    LABEL_MATCH_FUNCTIONS. Endpoint support for these varies; exact matching
    through author_by_name / multiple_authors is the portable fallback.
    """

    fn = (function or "").strip().upper()
    if fn not in LABEL_MATCH_FUNCTIONS:
        return invalid_parameter(FAMILY, "author_by_name_match", function, parameter="match function")
    return QueryResult(query=f"""
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX nlon: <http://lod.nl.go.kr/ontology/>
SELECT DISTINCT ?s ?label WHERE {{
    ?s rdf:type nlon:Author .
    ?s rdfs:label ?label .
    FILTER({fn}(?label, "{author_name}"))
}}
LIMIT 20""")


TEMPLATES = (
    QueryTemplate(
        family=FAMILY,
        operation="works_by_author",
        description="Works with title and issued date whose dcterms:creator is the given author URI.",
        builder=works_by_author,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="author_by_name",
        description="Authors whose label equals the given name.",
        builder=author_by_name,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="multiple_authors",
        description="Authors whose label equals any of the given names.",
        builder=multiple_authors,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="author_details",
        description="Profile fields of a single author URI.",
        builder=author_details,
    ),
    QueryTemplate(
        family=FAMILY,
        operation="author_by_name_match",
        description="Authors whose label partially matches the name via a SPARQL string function.",
        builder=author_by_name_match,
    ),
)


__all__ = [
    "FAMILY",
    "LABEL_MATCH_FUNCTIONS",
    "TEMPLATES",
    "author_by_name",
    "author_by_name_match",
    "author_details",
    "multiple_authors",
    "works_by_author",
]
