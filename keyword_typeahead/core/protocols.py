# keyword_typeahead/core/protocols.py
"""
Protocol interfaces for the collaborators of the query engine.

The engine never touches presentation or the network directly:
 - RenderSink receives state-derived render commands (TUI, tests, ...)
 - LookupTransport performs the remote typeahead lookup
Depending on Protocols keeps the engine testable with plain fakes.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from .candidates import CandidateEntry, CandidateKind


@runtime_checkable
class RenderSink(Protocol):
    """Commands pushed from the engine to the UI."""

    def render_prompt(self, text: str) -> None:
        """Show a single informational row ("Type a user name", "No users found")."""
        ...

    def render_candidate_list(
        self, candidates: Sequence[CandidateEntry], highlighted_id: Optional[str]
    ) -> None:
        ...

    def render_inline_hint(self, text: str) -> None:
        """Ghost suffix after the cursor. Empty string clears it."""
        ...

    def render_chip(self, keyword: str, value: str) -> None:
        ...

    def remove_chip(self) -> None:
        """Remove the most recently rendered chip."""
        ...

    def clear_suggestion_ui(self) -> None:
        ...

    def set_input_text(self, text: str, cursor: int) -> None:
        """Rewrite the editable input (chip commit, Tab completion)."""
        ...


@runtime_checkable
class LookupTransport(Protocol):
    """Remote typeahead lookup. Any failure is raised; the engine decides what it means."""

    async def lookup_by_keyword(
        self,
        keyword: str,
        query_text: str,
        kind: CandidateKind = CandidateKind.USER,
        scope: Optional[str] = None,
    ) -> List[CandidateEntry]:
        ...
