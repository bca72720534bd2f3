# tests/test_selection.py
import pytest

from keyword_typeahead.core.candidates import TopicEntry, UserEntry
from keyword_typeahead.core.selection import SelectionState


def users(*handles):
    return [UserEntry(h) for h in handles]


@pytest.fixture
def sel():
    s = SelectionState()
    s.set_candidates(users("alice", "albert", "alan"))
    return s


def test_starts_without_highlight(sel):
    assert sel.highlighted is None
    assert sel.highlighted_id is None


def test_down_from_nothing_starts_at_first(sel):
    assert sel.move_down().handle == "alice"
    assert sel.move_down().handle == "albert"
    assert sel.move_down().handle == "alan"
    assert sel.move_down().handle == "alice"


def test_up_from_nothing_starts_at_last(sel):
    assert sel.move_up().handle == "alan"
    assert sel.move_up().handle == "albert"
    assert sel.move_up().handle == "alice"
    assert sel.move_up().handle == "alan"


@pytest.mark.parametrize("start", [0, 1, 2])
def test_wrap_law(sel, start):
    for _ in range(start + 1):
        sel.move_down()
    origin = sel.highlighted_id
    for _ in range(len(sel)):
        sel.move_down()
    assert sel.highlighted_id == origin
    for _ in range(len(sel)):
        sel.move_up()
    assert sel.highlighted_id == origin


def test_navigation_on_empty_list_is_noop():
    s = SelectionState()
    assert s.move_up() is None
    assert s.move_down() is None
    assert s.highlighted_id is None


def test_highlight_survives_replacement_when_identity_returns(sel):
    sel.move_down()
    sel.move_down()  # albert
    sel.set_candidates(users("albert", "alfred"))
    assert sel.highlighted.handle == "albert"
    assert sel.move_down().handle == "alfred"


def test_dangling_highlight_means_no_selection(sel):
    sel.move_down()  # alice
    sel.set_candidates(users("bob", "carol"))
    assert sel.highlighted_id == "alice"
    assert sel.highlighted is None
    assert sel.resolved_id is None
    assert sel.move_down().handle == "bob"
    sel.set_candidates(users("dave", "erin"))
    assert sel.move_up().handle == "erin"


def test_commit_returns_and_clears(sel):
    sel.move_down()
    entry = sel.commit()
    assert entry.handle == "alice"
    assert len(sel) == 0
    assert sel.highlighted_id is None


def test_commit_without_highlight_is_noop(sel):
    assert sel.commit() is None
    assert len(sel) == 3


def test_select_by_identity(sel):
    assert sel.select("alan").handle == "alan"
    assert sel.select("nobody") is None
    assert sel.highlighted_id == "alan"


def test_topic_identity_is_label():
    s = SelectionState()
    s.set_candidates([TopicEntry("python"), TopicEntry("rust")])
    assert s.move_down().identity == "python"
