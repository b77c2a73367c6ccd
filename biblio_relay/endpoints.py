"""
URL helpers: query text -> endpoint URL -> relay URL.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping
from urllib.parse import quote

from biblio_relay.config import JPSEARCH_ENDPOINT, KNL_ENDPOINT, NDL_ENDPOINT, RelaySettings
from biblio_relay.queries.registry import normalize_family
from biblio_relay.queries.templates import EndpointFamily

ENDPOINTS: Mapping[EndpointFamily, str] = MappingProxyType(
    {
        EndpointFamily.KNL: KNL_ENDPOINT,
        EndpointFamily.JPSEARCH: JPSEARCH_ENDPOINT,
        EndpointFamily.NDL: NDL_ENDPOINT,
    }
)

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def endpoint_for(family: EndpointFamily | str) -> str:
    resolved = normalize_family(family)
    try:
        return ENDPOINTS[resolved]
    except KeyError as exc:
        raise ValueError(f"No SPARQL endpoint known for family {resolved.value}") from exc


def endpoint_url(family: EndpointFamily | str, query: str) -> str:
    return f"{endpoint_for(family)}?query={encode_component(query)}&format=json&type=json"


def relay_url(target_url: str, base: str | None = None) -> str:
    relay_base = (base or RelaySettings().public_url).rstrip("/")
    return f"{relay_base}/?url={encode_component(target_url)}"


__all__ = ["ENDPOINTS", "encode_component", "endpoint_for", "endpoint_url", "relay_url"]
