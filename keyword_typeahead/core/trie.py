# trie.py
# Prefix tree over the structured query keywords ("from:", ...).
# Built once at startup, only ever appended to; small enough that a plain
# dict-of-children node is the simplest thing that works.

from __future__ import annotations
from typing import Dict, Iterable, List, Optional


class TrieNode:
    """
    A single node in the Trie.
    value: the character leading to this node (None only at the root)
    children: char -> TrieNode
    is_terminal: marks that the path from the root spells an inserted keyword
    """

    __slots__ = ("value", "children", "is_terminal")

    def __init__(self, value: Optional[str] = None) -> None:
        self.value = value
        self.children: Dict[str, TrieNode] = {}
        self.is_terminal = False


class Trie:
    """
    Keyword trie used by the query engine for:
     - exact keyword matches (grammar classification)
     - prefix completions (inline ghost hint, Tab completion)
    Case-sensitive: "From:" is not "from:".
    """

    def __init__(self) -> None:
        self._root = TrieNode()

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Trie":
        trie = cls()
        for w in words:
            trie.insert(w)
        return trie

    # insertion -----------------------------------------------------
    def insert(self, word: str) -> None:
        """
        Insert a keyword. Re-inserting the same word changes nothing.
        The empty string is ignored so the root never becomes terminal.
        """
        if not word:
            return

        node = self._root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = TrieNode(ch)
                node.children[ch] = nxt
            node = nxt
        node.is_terminal = True

    add = insert

    # lookup ---------------------------------------------------------
    def _find(self, word: str) -> Optional[TrieNode]:
        node = self._root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def matches(self, word: str) -> bool:
        """True iff `word` was inserted exactly."""
        node = self._find(word)
        return node is not None and node.is_terminal

    def matching_prefixes(self, text: str) -> List[str]:
        """Inserted words that are prefixes of `text`, shortest first."""
        out: List[str] = []
        node = self._root
        for i, ch in enumerate(text):
            node = node.children.get(ch)
            if node is None:
                break
            if node.is_terminal:
                out.append(text[: i + 1])
        return out

    def completions(self, prefix: str) -> List[str]:
        """
        Return every inserted word starting with `prefix`, depth-first.
        Order follows child iteration and is not part of the contract.
        Empty prefix or unknown prefix -> [].
        """
        if not prefix:
            return []

        node = self._find(prefix)
        if node is None:
            return []

        out: List[str] = []
        self._collect(node, prefix, out)
        return out

    # internal recursive collector ---------------------------------------------------------
    def _collect(self, node: TrieNode, word: str, results: List[str]) -> None:
        """DFS collecting terminal words under a node."""
        if node.is_terminal:
            results.append(word)
        for child in node.children.values():
            self._collect(child, word + child.value, results)

    # convenience/debugging -----------------------------------------------------
    def words(self) -> List[str]:
        """All inserted words (O(N) walk, for inspection)."""
        acc: List[str] = []
        self._collect(self._root, "", acc)
        return acc

    def __len__(self) -> int:
        return len(self.words())

    def __contains__(self, word: str) -> bool:
        return self.matches(word)
