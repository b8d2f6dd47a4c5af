import pytest

from jirabuild.model import TransitionCandidate
from jirabuild.resolver import resolve_transition_id


class ExplodingList(list):
    """A candidate list that must never be looked at."""

    def __iter__(self):
        raise AssertionError("candidates were inspected")

    def __len__(self):
        raise AssertionError("candidates were inspected")


def test_empty_candidates():
    assert resolve_transition_id([], "x") is None
    assert resolve_transition_id(None, "x") is None


def test_null_name_returns_none_without_inspecting_candidates():
    assert resolve_transition_id(ExplodingList(), None) is None


def test_matches_ignoring_case():
    candidates = [TransitionCandidate(id=42, name="WORKFLOW")]
    assert resolve_transition_id(candidates, "workflow") == 42


def test_skips_candidates_without_name():
    candidates = [TransitionCandidate(id=None, name=None), TransitionCandidate(id=7, name="Name")]
    assert resolve_transition_id(candidates, "name") == 7


def test_no_match_after_all_candidates():
    candidates = [TransitionCandidate(name=None), TransitionCandidate(id=3, name="name")]
    assert resolve_transition_id(candidates, "workflow") is None


def test_first_match_wins():
    candidates = [
        TransitionCandidate(id=1, name="Done"),
        TransitionCandidate(id=2, name="DONE"),
    ]
    assert resolve_transition_id(candidates, "done") == 1


def test_name_must_match_exactly():
    candidates = [TransitionCandidate(id=5, name="Start Progress")]
    assert resolve_transition_id(candidates, "Start") is None


def test_candidate_with_name_requires_id():
    with pytest.raises(ValueError):
        TransitionCandidate(name="Close")


def test_candidate_id_from_string():
    assert TransitionCandidate(id="31", name="Close").id == 31


def test_only_case_differences_are_ignored():
    candidates = [TransitionCandidate(id=9, name="STRASSE")]
    assert resolve_transition_id(candidates, "Straße") is None
    assert resolve_transition_id(candidates, "strasse") == 9
