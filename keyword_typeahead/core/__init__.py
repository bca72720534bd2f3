"""
keyword_typeahead.core

The interaction engine behind the search box.
Contains:
 - the keyword trie (exact match + prefix completion)
 - the debounced lookup coordinator
 - keyboard-driven selection state
 - query modes, keyword grammar and the chip stack
 - the QueryModeEngine tying them together
"""

from .candidates import CandidateEntry, CandidateKind, TopicEntry, UserEntry
from .debouncer import DebouncedLookup, LookupResult
from .engine import EngineSettings, QueryModeEngine
from .protocols import LookupTransport, RenderSink
from .query_mode import BoundMode, Chip, ChipStack, Idle, KeywordLookup
from .selection import SelectionState
from .trie import Trie

__all__ = [
    "CandidateEntry",
    "CandidateKind",
    "TopicEntry",
    "UserEntry",
    "DebouncedLookup",
    "LookupResult",
    "EngineSettings",
    "QueryModeEngine",
    "LookupTransport",
    "RenderSink",
    "BoundMode",
    "Chip",
    "ChipStack",
    "Idle",
    "KeywordLookup",
    "SelectionState",
    "Trie",
]
