# keyword_typeahead/core/query_mode.py
"""
Query modes and the small pieces of input grammar around them.

Modes:
 - Idle: plain free-text search, no keyword in play
 - KeywordLookup(keyword, partial): user is typing a keyword argument ("from:al")
 - BoundMode(keyword, bound_value): keyword+value committed as a chip;
   further input is a secondary query scoped to the chip

Grammar: the whole input must be "<keyword><partial>" where keyword is a
word of the keyword trie and partial contains no whitespace. When several
keywords prefix the input the longest one wins.

The chip stack replaces any positional bookkeeping of rendered chips: the
engine pushes on commit and pops on backspace, the renderer only mirrors it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from ..errors import ChipStackFull
from .trie import Trie

_TRAILING_TOKEN = re.compile(r"\S+$")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class KeywordLookup:
    keyword: str
    partial: str


@dataclass(frozen=True)
class BoundMode:
    keyword: str
    bound_value: str


QueryMode = Union[Idle, KeywordLookup, BoundMode]

IDLE = Idle()


class KeywordGrammar:
    """Classifies raw input against the keyword trie."""

    def __init__(self, trie: Trie) -> None:
        self.trie = trie

    def classify(self, text: str) -> QueryMode:
        for keyword in reversed(self.trie.matching_prefixes(text)):
            partial = text[len(keyword):]
            if not any(ch.isspace() for ch in partial):
                return KeywordLookup(keyword, partial)
        return IDLE


# Inline hint -----------------------------------------------------------------

@dataclass(frozen=True)
class InlineHint:
    start: int  # index of the token in the input
    token: str
    completion: str

    @property
    def suffix(self) -> str:
        return self.completion[len(self.token):]


def token_at_cursor(text: str, cursor: int) -> Optional[Tuple[int, str]]:
    """Whitespace-delimited token ending at `cursor` as (start, token)."""
    cursor = max(0, min(cursor, len(text)))
    m = _TRAILING_TOKEN.search(text[:cursor])
    if m is None:
        return None
    return m.start(), m.group(0)


def inline_hint(trie: Trie, text: str, cursor: int) -> Optional[InlineHint]:
    """The single unambiguous keyword completion of the token at the cursor."""
    found = token_at_cursor(text, cursor)
    if found is None:
        return None
    start, token = found
    completions = trie.completions(token)
    if len(completions) != 1:
        return None
    return InlineHint(start, token, completions[0])


def apply_completion(text: str, cursor: int, hint: InlineHint) -> Tuple[str, int]:
    """Replace the hinted token with its completion; returns (text, cursor)."""
    end = hint.start + len(hint.token)
    new_text = text[: hint.start] + hint.completion + text[end:]
    return new_text, hint.start + len(hint.completion)


# Chips -----------------------------------------------------------------------

@dataclass(frozen=True)
class Chip:
    keyword: str
    value: str

    def __str__(self) -> str:
        return f"{self.keyword}{self.value}"


class ChipStack:
    """Ordered committed chips, most recent last."""

    def __init__(self, max_depth: int = 1) -> None:
        self.max_depth = max_depth
        self._chips: List[Chip] = []

    def push(self, chip: Chip) -> None:
        if len(self._chips) >= self.max_depth:
            raise ChipStackFull(f"at most {self.max_depth} chip(s) allowed")
        self._chips.append(chip)

    def pop(self) -> Optional[Chip]:
        return self._chips.pop() if self._chips else None

    def peek(self) -> Optional[Chip]:
        return self._chips[-1] if self._chips else None

    def clear(self) -> None:
        self._chips.clear()

    @property
    def full(self) -> bool:
        return len(self._chips) >= self.max_depth

    def __len__(self) -> int:
        return len(self._chips)

    def __iter__(self) -> Iterator[Chip]:
        return iter(list(self._chips))
