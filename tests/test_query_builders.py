import re

import pytest

from biblio_relay.classifier import extract_author_id, validate_query
from biblio_relay.queries import jpsearch, knl, ndl

KNL_AUTHOR = "http://lod.nl.go.kr/resource/KAC200203105"
NDL_AUTHOR = "http://id.ndl.go.jp/auth/entity/00026849"
KNL_SENTINEL = "-- ERROR: Invalid author ID provided to KNL worksByAuthor query --"
JPSEARCH_SENTINEL = "-- ERROR: Invalid author ID provided to JPSearch worksByAuthor query --"


def _limit(query: str) -> int:
    match = re.search(r"LIMIT (\d+)\s*$", query)
    assert match, f"query has no trailing LIMIT:\n{query}"
    return int(match.group(1))


@pytest.mark.parametrize("bad_id", [None, "", "undefined", "null"])
def test_knl_works_by_author_returns_sentinel_for_invalid_id(bad_id):
    result = knl.works_by_author(bad_id)
    assert not result.ok
    assert result.text == KNL_SENTINEL
    assert str(result) == KNL_SENTINEL
    assert result.error.family == "KNL"
    assert result.error.operation == "works_by_author"
    assert result.error.to_payload()["error_type"] == "invalid_template_parameter"


@pytest.mark.parametrize("bad_id", [None, "undefined", "null"])
def test_jpsearch_works_by_author_returns_sentinel_for_invalid_id(bad_id):
    result = jpsearch.works_by_author(bad_id)
    assert result.text == JPSEARCH_SENTINEL


def test_identifier_guard_covers_every_id_template():
    assert knl.author_details("null").text.startswith("-- ERROR: Invalid author ID provided to KNL authorDetails")
    assert jpsearch.works_with_metadata(None).text.startswith(
        "-- ERROR: Invalid author ID provided to JPSearch worksWithMetadata"
    )


def test_invalid_id_is_logged(caplog):
    with caplog.at_level("WARNING"):
        knl.works_by_author("undefined")
    assert any("invalid author ID" in record.getMessage() for record in caplog.records)


def test_knl_works_by_author_shape():
    result = knl.works_by_author(KNL_AUTHOR)
    assert result.ok
    query = result.text
    assert f"?work dcterms:creator <{KNL_AUTHOR}>" in query
    assert "dcterms:title ?title" in query
    assert "dcterms:issued ?issued" in query
    assert "OPTIONAL { ?work bibo:isbn ?isbn }" in query
    assert "ORDER BY ?issued ?title" in query
    assert _limit(query) == 50
    assert validate_query(query, ["work", "title", "issued", "isbn"])


def test_knl_works_by_author_round_trips_through_extraction():
    for author_id in (KNL_AUTHOR, "http://example.org/people/42"):
        assert extract_author_id(knl.works_by_author(author_id).text) == author_id


def test_multiple_authors_builds_ordered_disjunction_once():
    query = knl.multiple_authors(["A", "B"]).text
    assert query.count('?label = "A" || ?label = "B"') == 1
    assert 'FILTER(?label = "A" || ?label = "B")' in query
    assert "nlon:Author" in query
    assert _limit(query) == 20


def test_multiple_authors_keeps_input_order_for_three_names():
    query = knl.multiple_authors(["가라타니 고진", "유시민", "박태웅"]).text
    assert '?label = "가라타니 고진" || ?label = "유시민" || ?label = "박태웅"' in query


def test_multiple_authors_with_no_names_is_an_error():
    result = knl.multiple_authors([])
    assert not result.ok
    assert "author names" in result.text


def test_knl_author_by_name_exact_match():
    query = knl.author_by_name("유시민").text
    assert 'FILTER(?label = "유시민")' in query
    assert "?s rdf:type nlon:Author" in query


def test_knl_author_details_binds_values():
    query = knl.author_details(KNL_AUTHOR).text
    assert f"VALUES ?s {{ <{KNL_AUTHOR}> }}" in query
    assert "OPTIONAL { ?s nlon:fieldOfActivity ?fieldOfActivity }" in query
    assert _limit(query) == 1


@pytest.mark.parametrize("function", ["CONTAINS", "strstarts", "STRENDS", "REGEX"])
def test_knl_author_by_name_match_uses_string_function(function):
    query = knl.author_by_name_match("가라타니", function).text
    assert f'FILTER({function.upper()}(?label, "가라타니"))' in query


def test_knl_author_by_name_match_rejects_unknown_function():
    result = knl.author_by_name_match("가라타니", "LCASE")
    assert not result.ok
    assert "match function" in result.text


def test_jpsearch_works_by_author_shape():
    query = jpsearch.works_by_author(NDL_AUTHOR).text
    assert f"?s schema:creator <{NDL_AUTHOR}>" in query
    assert "OPTIONAL { ?s schema:datePublished ?d }" in query
    assert "ORDER BY ?d ?o" in query
    assert _limit(query) == 50


def test_jpsearch_works_with_metadata_has_optional_publisher_and_isbn():
    query = jpsearch.works_with_metadata(NDL_AUTHOR).text
    assert "OPTIONAL { ?s schema:publisher ?publisher }" in query
    assert "OPTIONAL { ?s schema:isbn ?isbn }" in query
    assert "ORDER BY ?date ?title" in query
    assert validate_query(query, ["title", "date", "link", "publisher", "isbn"])


def test_ndl_author_queries_use_foaf_person():
    exact = ndl.author_by_name("柄谷行人").text
    contains = ndl.author_by_name_contains("柄谷").text
    assert "?s rdf:type foaf:Person" in exact
    assert 'FILTER(?label = "柄谷行人")' in exact
    assert 'FILTER(CONTAINS(?label, "柄谷"))' in contains
    assert _limit(exact) == _limit(contains) == 20


def test_names_are_interpolated_without_escaping():
    query = ndl.author_by_name('Say "hi"').text
    assert 'FILTER(?label = "Say "hi"")' in query
