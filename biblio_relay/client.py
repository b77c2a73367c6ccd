"""
Caller-side helper: send a SPARQL query to an endpoint through the relay and read the bindings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from biblio_relay.endpoints import endpoint_url, relay_url
from biblio_relay.queries.templates import EndpointFamily, QueryResult

logger = logging.getLogger(__name__)

Binding = Dict[str, Dict[str, Any]]

DEFAULT_TIMEOUT = 10.0


@dataclass
class SparqlResponse:
    status_code: Optional[int] = None
    bindings: List[Binding] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def labels(self, variable: str = "label") -> List[str]:
        return [row[variable]["value"] for row in self.bindings if variable in row and "value" in row[variable]]


def run_query(
    query: str | QueryResult,
    family: EndpointFamily | str,
    *,
    relay_base: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.Client | None = None,
) -> SparqlResponse:
    """
    Issue one GET through the relay. Failures come back as `error` text,
    never as exceptions; the relay itself has no timeout, so `timeout` is the
    caller's deadline.
    """

    if isinstance(query, QueryResult):
        if not query.ok:
            return SparqlResponse(error=query.error.message)
        query = query.text

    url = relay_url(endpoint_url(family, query), base=relay_base)
    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        response = http.get(url)
    except httpx.RequestError as exc:
        logger.warning("Relay request failed: %s", exc)
        return SparqlResponse(error=f"RequestError: {exc}")
    finally:
        if owns_client:
            http.close()

    return parse_sparql_response(response)


def parse_sparql_response(response: httpx.Response) -> SparqlResponse:
    if response.status_code >= 400:
        return SparqlResponse(status_code=response.status_code, error=f"HTTP {response.status_code}: {response.text}")

    try:
        data = response.json()
    except json.JSONDecodeError:
        return SparqlResponse(status_code=response.status_code, error="Response is not JSON")

    if not isinstance(data, dict):
        return SparqlResponse(status_code=response.status_code, error="Unexpected response format")
    if data.get("error"):
        return SparqlResponse(status_code=response.status_code, error=str(data["error"]))

    results = data.get("results")
    if not isinstance(results, dict) or not isinstance(results.get("bindings"), list):
        return SparqlResponse(status_code=response.status_code, error="Unexpected response format")

    bindings: List[Binding] = results["bindings"]
    logger.info("SPARQL returned %d bindings", len(bindings))
    return SparqlResponse(status_code=response.status_code, bindings=bindings)


__all__ = ["Binding", "SparqlResponse", "parse_sparql_response", "run_query"]
