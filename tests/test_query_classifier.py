import pytest

from biblio_relay.classifier import (
    CLASSIFICATION_RULES,
    UNKNOWN_QUERY_TYPE,
    classify,
    extract_author_id,
    get_query_type,
    is_jpsearch_query,
    is_knl_query,
    validate_query,
)
from biblio_relay.queries import EndpointFamily, QUERY_SETS, jpsearch, knl, ndl

KNL_AUTHOR = "http://lod.nl.go.kr/resource/KAC200203105"
NDL_AUTHOR = "http://id.ndl.go.jp/auth/entity/00026849"


def test_knl_and_jpsearch_detection_are_exclusive_on_generated_text():
    knl_text = knl.works_by_author(KNL_AUTHOR).text
    jp_text = jpsearch.works_by_author(NDL_AUTHOR).text

    assert is_knl_query(knl_text)
    assert not is_jpsearch_query(knl_text)
    assert is_jpsearch_query(jp_text)
    assert not is_knl_query(jp_text)


def test_knl_takes_precedence_when_both_markers_present():
    text = "SELECT ?s WHERE { ?s schema:creator <http://lod.nl.go.kr/resource/X> }"
    assert is_knl_query(text)
    assert not is_jpsearch_query(text)
    assert get_query_type(text) == "KNL Query"


@pytest.mark.parametrize(
    "query, expected",
    [
        (knl.works_by_author(KNL_AUTHOR).text, "KNL Works Search"),
        (knl.author_by_name("유시민").text, "KNL Author Search"),
        (knl.multiple_authors(["A", "B"]).text, "KNL Author Search"),
        (knl.author_details(KNL_AUTHOR).text, "KNL Author Search"),
        ("SELECT * WHERE { ?s ?p <http://lod.nl.go.kr/resource/X> }", "KNL Query"),
        (jpsearch.works_by_author(NDL_AUTHOR).text, "JPSearch Works Search"),
        (jpsearch.works_with_metadata(NDL_AUTHOR).text, "JPSearch Works Search"),
        (ndl.author_by_name("柄谷行人").text, "NDL Author Search"),
        (ndl.author_by_name_contains("柄谷").text, "NDL Author Search"),
        ("SELECT * WHERE { ?s ?p ?o } LIMIT 1", UNKNOWN_QUERY_TYPE),
        ("", UNKNOWN_QUERY_TYPE),
    ],
)
def test_get_query_type(query, expected):
    assert get_query_type(query) == expected


def test_rules_are_ordered_knl_first():
    families = [rule.family for rule in CLASSIFICATION_RULES]
    assert families == [
        EndpointFamily.KNL,
        EndpointFamily.KNL,
        EndpointFamily.KNL,
        EndpointFamily.JPSEARCH,
        EndpointFamily.NDL,
    ]


def test_extract_author_id_from_each_template_family():
    assert extract_author_id(jpsearch.works_by_author(NDL_AUTHOR).text) == NDL_AUTHOR
    assert extract_author_id(knl.works_by_author(KNL_AUTHOR).text) == KNL_AUTHOR
    assert extract_author_id(knl.author_details(KNL_AUTHOR).text) == KNL_AUTHOR


def test_extract_author_id_prefers_role_binding_over_namespace_fallback():
    text = (
        "SELECT ?s WHERE { ?x ?p <http://lod.nl.go.kr/resource/OTHER> . "
        "?s schema:creator <http://example.org/author/1> }"
    )
    assert extract_author_id(text) == "http://example.org/author/1"


def test_extract_author_id_falls_back_to_namespaces():
    assert extract_author_id(f"SELECT * WHERE {{ <{NDL_AUTHOR}> ?p ?o }}") == NDL_AUTHOR
    assert extract_author_id(f"SELECT * WHERE {{ ?s ?p <{KNL_AUTHOR}> }}") == KNL_AUTHOR


def test_extract_author_id_ignores_prefix_declarations():
    assert extract_author_id(ndl.author_by_name("柄谷行人").text) is None
    assert extract_author_id(knl.author_by_name("유시민").text) is None


def test_extract_author_id_from_sentinel_is_none():
    assert extract_author_id(knl.works_by_author(None).text) is None


def test_validate_query_requires_every_variable():
    query = knl.works_by_author(KNL_AUTHOR).text
    assert validate_query(query, ["work", "title"])
    assert not validate_query(query, ["work", "publisher"])
    assert validate_query(query)
    assert validate_query(query, [])


def test_classify_bundles_family_label_and_id():
    classified = classify(knl.works_by_author(KNL_AUTHOR).text)
    assert classified.family == EndpointFamily.KNL
    assert classified.query_type == "KNL Works Search"
    assert classified.extracted_id == KNL_AUTHOR

    unknown = classify("ASK { ?s ?p ?o }")
    assert unknown.family == EndpointFamily.UNKNOWN
    assert unknown.query_type == UNKNOWN_QUERY_TYPE
    assert unknown.extracted_id is None


def test_query_sets_classify_as_expected():
    karatani = QUERY_SETS["karatani_search"]
    assert get_query_type(karatani["jpsearch"]) == "JPSearch Works Search"
    assert get_query_type(karatani["knl"]) == "KNL Works Search"
    park = QUERY_SETS["park_tae_woong_search"]
    assert '?label = "박태웅" || ?label = "朴泰雄"' in park["knl_multiple_ids"]
    assert get_query_type(QUERY_SETS["test_search"]["knl_multi_authors"]) == "KNL Author Search"
