# keyword_typeahead/core/selection.py
# Keyboard-navigable selection over the current candidate list.
# The highlight is stored as an identity (handle/label), not an index, so it
# survives list replacement when the same candidate comes back.

from __future__ import annotations

from typing import List, Optional, Sequence

from .candidates import CandidateEntry


class SelectionState:
    def __init__(self) -> None:
        self._candidates: List[CandidateEntry] = []
        self._highlighted_id: Optional[str] = None

    @property
    def candidates(self) -> List[CandidateEntry]:
        return list(self._candidates)

    @property
    def highlighted_id(self) -> Optional[str]:
        """Raw highlight; may dangle after set_candidates()."""
        return self._highlighted_id

    @property
    def highlighted(self) -> Optional[CandidateEntry]:
        idx = self._index()
        return self._candidates[idx] if idx >= 0 else None

    @property
    def resolved_id(self) -> Optional[str]:
        """Highlight only if it references a present candidate."""
        entry = self.highlighted
        return entry.identity if entry is not None else None

    def __len__(self) -> int:
        return len(self._candidates)

    def __bool__(self) -> bool:
        return bool(self._candidates)

    def set_candidates(self, candidates: Sequence[CandidateEntry]) -> None:
        # a highlight that no longer appears is left dangling; navigation
        # treats it as "nothing highlighted"
        self._candidates = list(candidates)

    def _index(self) -> int:
        if self._highlighted_id is None:
            return -1
        for i, c in enumerate(self._candidates):
            if c.identity == self._highlighted_id:
                return i
        return -1

    # navigation ---------------------------------------------------------------
    def move_up(self) -> Optional[CandidateEntry]:
        if not self._candidates:
            return None
        i = self._index()
        new = i - 1 if i > 0 else len(self._candidates) - 1
        self._highlighted_id = self._candidates[new].identity
        return self._candidates[new]

    def move_down(self) -> Optional[CandidateEntry]:
        if not self._candidates:
            return None
        i = self._index()
        last = len(self._candidates) - 1
        new = i + 1 if 0 <= i < last else 0
        self._highlighted_id = self._candidates[new].identity
        return self._candidates[new]

    def select(self, identity: str) -> Optional[CandidateEntry]:
        """Pointer selection: highlight `identity` if it is in the list."""
        for c in self._candidates:
            if c.identity == identity:
                self._highlighted_id = identity
                return c
        return None

    def commit(self) -> Optional[CandidateEntry]:
        """
        Return the highlighted candidate and clear everything.
        No valid highlight -> None, state untouched (keys can race redraws).
        """
        entry = self.highlighted
        if entry is None:
            return None
        self.clear()
        return entry

    def clear(self) -> None:
        self._candidates = []
        self._highlighted_id = None
