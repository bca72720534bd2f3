# tests/test_trie.py
import pytest

from keyword_typeahead.core.trie import Trie

KEYWORDS = ["from:", "to:", "filter:", "film", "fil"]


@pytest.fixture
def trie():
    return Trie.from_words(KEYWORDS)


def test_matches_only_inserted_words(trie):
    for w in KEYWORDS:
        assert trie.matches(w)
    for w in ["", "f", "fro", "from", "from:x", "filter", "To:"]:
        assert not trie.matches(w)


def test_completions_are_exactly_the_words_with_prefix(trie):
    for prefix in ["f", "fi", "fil", "filt", "fr", "t", "from:"]:
        got = trie.completions(prefix)
        expected = {w for w in KEYWORDS if w.startswith(prefix)}
        assert sorted(got) == sorted(expected)
        assert len(got) == len(set(got))


def test_completions_empty_or_unknown_prefix(trie):
    assert trie.completions("") == []
    assert trie.completions("zz") == []
    assert trie.completions("from:al") == []


def test_insert_is_idempotent():
    t = Trie()
    t.insert("from:")
    t.insert("from:")
    assert t.completions("fr") == ["from:"]
    assert len(t) == 1


def test_empty_string_is_ignored():
    t = Trie()
    t.add("")
    assert not t.matches("")
    assert t.words() == []


def test_from_keyword_scenario():
    t = Trie()
    t.add("from:")
    assert t.completions("fr") == ["from:"]
    assert t.matches("from:")
    assert "from:" in t


def test_matching_prefixes_shortest_first(trie):
    assert trie.matching_prefixes("filter:abc") == ["fil", "filter:"]
    assert trie.matching_prefixes("from:al") == ["from:"]
    assert trie.matching_prefixes("hello") == []
