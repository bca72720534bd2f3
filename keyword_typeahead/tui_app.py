# tui_app.py — Keyword Typeahead TUI Application
# -------------------------------------------------------
# Terminal search box driven by the QueryModeEngine.
# Features:
#  - Ghost completion of structured keywords ("fr" -> "from:"), TAB accepts
#  - Debounced user lookup while typing "from:<handle>"
#  - Up/Down to move through suggestions, Enter or click to commit a chip
#  - Backspace on an empty box removes the chip again
#  - Chip-scoped topic suggestions once a chip is set
# The app is the engine's RenderSink: the engine decides, the widgets draw.
# -------------------------------------------------------

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Input, Static

from keyword_typeahead.core.candidates import CandidateEntry, CandidateKind, describe
from keyword_typeahead.core.engine import QueryModeEngine
from keyword_typeahead.core.protocols import LookupTransport
from keyword_typeahead.core.trie import Trie
from keyword_typeahead.transport.typeahead_client import TypeaheadClient
from keyword_typeahead.utils.config_manager import Config
from keyword_typeahead.utils.metrics_tracker import Metrics


class ChipBar(Static):
    """Committed keyword chips, left of the input. Mirrors the engine's chip stack."""

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.chips: List[str] = []

    def push(self, keyword: str, value: str) -> None:
        self.chips.append(f"{keyword}{value}")
        self._redraw()

    def pop(self) -> None:
        if self.chips:
            self.chips.pop()
        self._redraw()

    def _redraw(self) -> None:
        self.update(" ".join(f"[reverse] {escape(c)} [/reverse]" for c in self.chips))
        self.display = bool(self.chips)


class GhostHint(Static):
    """Low-contrast completion shown under the input. Never touches the input value."""

    def show_hint(self, text: str, suffix: str) -> None:
        if not suffix:
            self.update("")
            return
        self.update(f"[dim]{escape(text)}[italic]{escape(suffix)}[/italic]  ⇥ tab[/dim]")


class SuggestionPanel(Static):
    """
    Suggestion dropdown.
    Shows either a single informational row or the candidate rows,
    the highlighted one in reverse video. Rows are clickable.
    """

    def show_text(self, text: str) -> None:
        self.update(f"[dim]{escape(text)}[/dim]")

    def show_candidates(
        self, candidates: Sequence[CandidateEntry], highlighted_id: Optional[str]
    ) -> None:
        lines = []
        for c in candidates:
            label = escape(describe(c))
            if c.kind is CandidateKind.USER:
                label = f"[@click=app.pick_candidate({c.identity!r})]{label}[/]"
            if c.identity == highlighted_id:
                lines.append(f"[reverse]▶ {label}[/reverse]")
            else:
                lines.append(f"  {label}")
        self.update("\n".join(lines))

    def clear_rows(self) -> None:
        self.update("")


class TypingLatency(Static):
    """Bottom-left readout showing how long the last lookup took."""

    def set_latency(self, seconds: float) -> None:
        ms = round(seconds * 1000)
        self.update(f"[dim]Lookup:[/dim] {ms}ms")


class SearchBox(Input):
    """
    Input that hands navigation keys to the engine before its own handling.
    Keys the engine does not consume keep their normal Input behavior.
    """

    BINDINGS = [
        Binding("tab", "complete_keyword", "Complete", show=False),
        Binding("up", "suggestion_up", show=False),
        Binding("down", "suggestion_down", show=False),
    ]

    @property
    def engine(self) -> QueryModeEngine:
        return self.app.engine

    def action_complete_keyword(self) -> None:
        if not self.engine.handle_key("tab", self.value, self.cursor_position):
            self.screen.focus_next()

    def action_suggestion_up(self) -> None:
        self.engine.handle_key("up", self.value, self.cursor_position)

    def action_suggestion_down(self) -> None:
        self.engine.handle_key("down", self.value, self.cursor_position)

    def action_delete_left(self) -> None:
        if self.engine.handle_key("backspace", self.value, self.cursor_position):
            return
        super().action_delete_left()


# Main Application -----------------------------------------------------------------
class TypeaheadApp(App):
    """
    Architecture:
     - SearchBox events to QueryModeEngine
     - engine render commands to widgets (this class implements RenderSink)
    """

    CSS = """
    #query { height: 3; }
    ChipBar { width: auto; padding: 1 1 0 1; color: $accent; }
    SearchBox { width: 1fr; }
    GhostHint { height: 1; padding: 0 2; }
    SuggestionPanel { padding: 0 2; height: auto; max-height: 12; }
    #bottom { dock: bottom; height: 1; }
    #status { padding-left: 2; }
    """

    BINDINGS = [
        ("ctrl+r", "reset_chips", "Reset"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[LookupTransport] = None,
    ) -> None:
        super().__init__()
        self.cfg = config or Config()
        self.transport = transport or TypeaheadClient(
            self.cfg.credentials(),
            base_url=self.cfg.get("base_url"),
            timeout=float(self.cfg.get("request_timeout")),
        )
        self.metrics = Metrics()
        self.engine = QueryModeEngine(
            Trie.from_words(self.cfg.get("keywords")),
            self.transport,
            self,
            settings=self.cfg.engine_settings(),
            metrics=self.metrics,
        )

    # UI --------------------------------------------------------------------
    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main"):
            with Horizontal(id="query"):
                yield ChipBar(id="chips")
                yield SearchBox(placeholder="Search… (try from:)", id="search")
            yield GhostHint(id="ghost")
            yield SuggestionPanel(id="suggestions")
        with Horizontal(id="bottom"):
            yield TypingLatency(id="latency")
            yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(ChipBar).display = False
        self.query_one(SearchBox).focus()

    async def on_unmount(self) -> None:
        self.engine.dispose()
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    # Input events ------------------------------------------------------------
    def on_input_changed(self, event: Input.Changed) -> None:
        self.engine.handle_input(event.value, event.input.cursor_position)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.engine.handle_key("enter", event.value, event.input.cursor_position):
            return
        chips = " ".join(self.query_one(ChipBar).chips)
        query = f"{chips} {event.value}".strip()
        self.query_one("#status", Static).update(f"Search: [b]{escape(query)}[/b]")

    def action_pick_candidate(self, identity: str) -> None:
        self.engine.select_candidate(identity)

    def action_reset_chips(self) -> None:
        box = self.query_one(SearchBox)
        box.value = ""
        while self.engine.handle_key("backspace", ""):
            pass
        self.query_one("#status", Static).update("[yellow]Chips cleared[/yellow]")

    # RenderSink --------------------------------------------------------------
    def render_prompt(self, text: str) -> None:
        self.query_one(SuggestionPanel).show_text(text)
        self._refresh_latency()

    def render_candidate_list(
        self, candidates: Sequence[CandidateEntry], highlighted_id: Optional[str]
    ) -> None:
        self.query_one(SuggestionPanel).show_candidates(candidates, highlighted_id)
        self._refresh_latency()

    def render_inline_hint(self, text: str) -> None:
        self.query_one(GhostHint).show_hint(self.query_one(SearchBox).value, text)

    def render_chip(self, keyword: str, value: str) -> None:
        self.query_one(ChipBar).push(keyword, value)

    def remove_chip(self) -> None:
        self.query_one(ChipBar).pop()

    def clear_suggestion_ui(self) -> None:
        self.query_one(SuggestionPanel).clear_rows()

    def set_input_text(self, text: str, cursor: int) -> None:
        box = self.query_one(SearchBox)
        box.value = text
        box.cursor_position = cursor
        box.focus()

    def _refresh_latency(self) -> None:
        self.query_one(TypingLatency).set_latency(self.metrics.last("lookup_latency"))


if __name__ == "__main__":
    TypeaheadApp().run()
