# keyword_typeahead/core/engine.py
"""
QueryModeEngine - the interaction engine behind the search box.

Consumes two kinds of events from the UI:
 - handle_input(text, cursor): the input value changed
 - handle_key(key, current_text, cursor): a key was pressed (returns True if consumed)
and emits render commands to a RenderSink. It owns the keyword trie, the
debounced lookup coordinator, the selection state and the chip stack.

Flow per input event:
  text -> inline hint (trie, synchronous)
       -> classify (Idle / KeywordLookup) or, with a chip, secondary query
       -> context changed? cancel timer, bump generation, (re)schedule lookup
  lookup settles -> generation still current? -> selection -> render

Stale results: every scheduled lookup remembers the generation it was
scheduled under. The generation moves whenever the (mode, query) context
changes, so a late answer for an abandoned context is dropped on arrival.
In-flight transport calls are never cancelled, only ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..utils.metrics_tracker import Metrics
from .candidates import CandidateEntry, CandidateKind
from .debouncer import DebouncedLookup, LookupResult
from .protocols import LookupTransport, RenderSink
from .query_mode import (
    IDLE,
    BoundMode,
    Chip,
    ChipStack,
    Idle,
    KeywordGrammar,
    KeywordLookup,
    QueryMode,
    apply_completion,
    inline_hint,
)
from .selection import SelectionState
from .trie import Trie

logger = logging.getLogger(__name__)

Context = Tuple[QueryMode, str]


@dataclass
class EngineSettings:
    debounce_ms: int = 200
    max_candidates: int = 8
    max_chips: int = 1
    prompt_text: str = "Type a user name"
    empty_text: str = "No users found"
    no_topics_text: str = "No topics found"


class QueryModeEngine:
    """Single-owner controller; create it per input field and dispose() it with the field."""

    def __init__(
        self,
        trie: Trie,
        transport: LookupTransport,
        sink: RenderSink,
        settings: Optional[EngineSettings] = None,
        metrics: Optional[Metrics] = None,
        debouncer: Optional[DebouncedLookup[List[CandidateEntry]]] = None,
    ) -> None:
        self.trie = trie
        self.grammar = KeywordGrammar(trie)
        self.transport = transport
        self.sink = sink
        self.settings = settings or EngineSettings()
        self.metrics = metrics or Metrics()
        self.selection = SelectionState()
        self.chips = ChipStack(self.settings.max_chips)
        self._debouncer: DebouncedLookup[List[CandidateEntry]] = debouncer or DebouncedLookup()
        self._context: Context = (IDLE, "")
        self._generation = 0
        self._disposed = False

    # state ------------------------------------------------------------------
    @property
    def mode(self) -> QueryMode:
        return self._context[0]

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def lookup_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _enter(self, mode: QueryMode, query: str = "") -> bool:
        """Switch context; False if nothing changed. Cancels the exited context's timer."""
        context = (mode, query)
        if context == self._context:
            return False
        if mode != self._context[0]:
            logger.debug("mode %s -> %s", self._context[0], mode)
        self._debouncer.cancel()
        self._generation += 1
        self._context = context
        return True

    # input events -------------------------------------------------------------
    def handle_input(self, text: str, cursor: Optional[int] = None) -> None:
        if self._disposed:
            return
        cursor = len(text) if cursor is None else cursor

        hint = inline_hint(self.trie, text, cursor)
        self.sink.render_inline_hint(hint.suffix if hint else "")

        if isinstance(self.mode, BoundMode):
            self._bound_input(text)
            return

        mode = self.grammar.classify(text)
        if isinstance(mode, Idle):
            if self._enter(IDLE):
                self.selection.clear()
                self.sink.clear_suggestion_ui()
            return

        if not self._enter(mode, mode.partial):
            return
        if not mode.partial:
            self.selection.clear()
            self.sink.render_prompt(self.settings.prompt_text)
            return
        self._schedule(CandidateKind.USER, mode.keyword, mode.partial)

    def _bound_input(self, text: str) -> None:
        query = text.strip()
        if not self._enter(self.mode, query):
            return
        self.selection.clear()
        if not query:
            self.sink.clear_suggestion_ui()
            return
        chip = self.chips.peek()
        self._schedule(CandidateKind.TOPIC, chip.keyword, query, scope=str(chip))

    # key events ---------------------------------------------------------------
    def handle_key(self, key: str, current_text: str, cursor: Optional[int] = None) -> bool:
        if self._disposed:
            return False
        key = key.lower()

        if key == "tab":
            return self._complete(current_text, cursor)
        if key == "backspace":
            return self._backspace(current_text)

        # navigation and commit only apply to keyword argument candidates
        if not isinstance(self.mode, KeywordLookup) or not self.selection:
            return False
        if key == "up":
            self.selection.move_up()
            self._render_selection()
            return True
        if key == "down":
            self.selection.move_down()
            self._render_selection()
            return True
        if key == "enter":
            entry = self.selection.highlighted
            if entry is None:
                return False
            return self._commit(entry)
        return False

    def select_candidate(self, identity: str) -> bool:
        """Pointer selection of a row: highlight and commit in one go."""
        if self._disposed or not isinstance(self.mode, KeywordLookup):
            return False
        entry = self.selection.select(identity)
        if entry is None:
            return False
        return self._commit(entry)

    def _commit(self, entry: CandidateEntry) -> bool:
        mode = self.mode
        if self.chips.full:
            logger.debug("chip stack full, not committing %s", entry.identity)
            return False
        chip = Chip(mode.keyword, entry.identity)
        self.chips.push(chip)
        self.selection.clear()
        self._enter(BoundMode(chip.keyword, chip.value))
        logger.info("committed chip %s", chip)

        self.sink.clear_suggestion_ui()
        self.sink.render_inline_hint("")
        self.sink.set_input_text("", 0)
        self.sink.render_chip(chip.keyword, chip.value)
        return True

    def _backspace(self, current_text: str) -> bool:
        if current_text or not self.chips:
            return False
        chip = self.chips.pop()
        self.sink.remove_chip()
        logger.info("removed chip %s", chip)

        top = self.chips.peek()
        self._enter(BoundMode(top.keyword, top.value) if top else IDLE)
        self.selection.clear()
        self.sink.clear_suggestion_ui()
        self.sink.render_inline_hint("")
        return True

    def _complete(self, text: str, cursor: Optional[int]) -> bool:
        cursor = len(text) if cursor is None else cursor
        hint = inline_hint(self.trie, text, cursor)
        if hint is None or not hint.suffix:
            return False
        new_text, new_cursor = apply_completion(text, cursor, hint)
        self.sink.set_input_text(new_text, new_cursor)
        self.handle_input(new_text, new_cursor)
        return True

    def _render_selection(self) -> None:
        self.sink.render_candidate_list(self.selection.candidates, self.selection.resolved_id)

    # lookups ------------------------------------------------------------------
    def _schedule(
        self, kind: CandidateKind, keyword: str, query: str, scope: Optional[str] = None
    ) -> None:
        generation = self._generation

        async def perform() -> List[CandidateEntry]:
            with self.metrics.timer("lookup_latency"):
                return await self.transport.lookup_by_keyword(keyword, query, kind=kind, scope=scope)

        def settled(result: LookupResult[List[CandidateEntry]]) -> None:
            self._settle(generation, kind, query, result)

        self._debouncer.schedule(
            f"{kind.value}:{query}", perform, settled, self.settings.debounce_ms
        )

    def _settle(
        self,
        generation: int,
        kind: CandidateKind,
        query: str,
        result: LookupResult[List[CandidateEntry]],
    ) -> None:
        if self._disposed or generation != self._generation:
            logger.debug("dropping stale %s lookup for %r", kind.value, query)
            self.metrics.incr("lookup_stale")
            return

        if result.ok:
            self.metrics.incr("lookup_ok")
            candidates = list(result.value or [])[: self.settings.max_candidates]
        else:
            logger.warning("%s lookup for %r failed: %s", kind.value, query, result.error)
            self.metrics.incr("lookup_failed")
            candidates = []

        self.selection.set_candidates(candidates)
        if candidates:
            self._render_selection()
        elif kind is CandidateKind.USER:
            self.sink.render_prompt(self.settings.empty_text)
        else:
            self.sink.render_prompt(self.settings.no_topics_text)

    # lifecycle ----------------------------------------------------------------
    def dispose(self) -> None:
        """Cancel timers, abandon in-flight lookups, ignore further events."""
        if self._disposed:
            return
        self._disposed = True
        self._debouncer.close()
        self.selection.clear()
        self.chips.clear()
        logger.debug("engine disposed")
