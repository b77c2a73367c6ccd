"""
Pre-defined query sets for recurring searches.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from biblio_relay.queries import jpsearch, knl

KARATANI_NDL_ID = "http://id.ndl.go.jp/auth/entity/00026849"
KARATANI_KNL_ID = "http://lod.nl.go.kr/resource/KAC200203105"


def _freeze(queries: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(queries))


QUERY_SETS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        # Karatani Kojin
        "karatani_search": _freeze(
            {
                "jpsearch": jpsearch.works_by_author(KARATANI_NDL_ID).text,
                "knl": knl.works_by_author(KARATANI_KNL_ID).text,
            }
        ),
        # Park Tae-woong
        "park_tae_woong_search": _freeze(
            {
                "knl_author_search": knl.author_by_name("박태웅").text,
                "knl_multiple_ids": knl.multiple_authors(["박태웅", "朴泰雄"]).text,
            }
        ),
        "test_search": _freeze(
            {
                "knl_multi_authors": knl.multiple_authors(["가라타니 고진", "유시민", "박태웅"]).text,
            }
        ),
    }
)


__all__ = ["KARATANI_KNL_ID", "KARATANI_NDL_ID", "QUERY_SETS"]
