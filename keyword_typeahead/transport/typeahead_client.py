# keyword_typeahead/transport/typeahead_client.py
"""
Lookup transports used by the engine.

TypeaheadClient talks to the search typeahead endpoint over httpx.AsyncClient:
 - user lookups (keyword argument):  q="@<handle>", result_type=users
 - topic lookups (chip-scoped query): q="<text> <chip>", result_type=topics
Non-2xx answers raise TransportError, network problems raise httpx.HTTPError.
The engine turns either into "no candidates".

StaticTransport answers from a fixed list, for --offline runs and demos.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..core.candidates import CandidateEntry, CandidateKind, decode
from ..errors import TransportError
from .credentials import SessionCredentials

logger = logging.getLogger(__name__)

TYPEAHEAD_PATH = "/i/api/1.1/search/typeahead.json"
DEFAULT_BASE_URL = "https://twitter.com"


def build_params(query_text: str, kind: CandidateKind, scope: Optional[str] = None) -> Dict[str, str]:
    if kind is CandidateKind.USER:
        q = f"@{query_text}"
        result_type = "users"
    else:
        q = f"{query_text} {scope}" if scope else query_text
        result_type = "topics"
    return {
        "include_ext_is_blue_verified": "1",
        "q": q,
        "src": "search_box",
        "result_type": result_type,
    }


class TypeaheadClient:
    def __init__(
        self,
        credentials: Optional[SessionCredentials] = None,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ) -> None:
        self.credentials = credentials or SessionCredentials()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def lookup_by_keyword(
        self,
        keyword: str,
        query_text: str,
        kind: CandidateKind = CandidateKind.USER,
        scope: Optional[str] = None,
    ) -> List[CandidateEntry]:
        params = build_params(query_text, kind, scope)
        logger.debug("typeahead %s q=%r (keyword %s)", params["result_type"], params["q"], keyword)
        response = await self._client.get(
            TYPEAHEAD_PATH, params=params, headers=self.credentials.headers()
        )
        if response.status_code != 200:
            raise TransportError(response.status_code, response.reason_phrase)
        payload: Dict[str, Any] = response.json()
        return decode(payload, kind)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TypeaheadClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


class StaticTransport:
    """Case-insensitive prefix filter over a fixed candidate list."""

    def __init__(self, entries: Iterable[CandidateEntry]) -> None:
        self.entries = list(entries)
        self.calls: List[str] = []

    async def lookup_by_keyword(
        self,
        keyword: str,
        query_text: str,
        kind: CandidateKind = CandidateKind.USER,
        scope: Optional[str] = None,
    ) -> List[CandidateEntry]:
        self.calls.append(query_text)
        needle = query_text.lower()
        return [
            e for e in self.entries
            if e.kind is kind and e.identity.lower().startswith(needle)
        ]

    async def aclose(self) -> None:
        return None
