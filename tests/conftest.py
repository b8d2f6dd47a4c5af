import io
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from jira.exceptions import JIRAError

from jirabuild.config import AppConfig, JiraSite, JobBinding
from jirabuild.exceptions import RemoteActionError
from jirabuild.model import IssueRef, TransitionCandidate
from jirabuild.tracker import IssueTracker


class RecordingTracker(IssueTracker):
    """In-memory tracker that records every call made to it."""

    def __init__(
        self,
        issues: Optional[List[str]] = None,
        transitions: Optional[List[TransitionCandidate]] = None,
    ):
        self.issues = issues if issues is not None else ["ABC-1"]
        self.transitions = transitions if transitions is not None else []
        self.failing: Dict[str, Exception] = {}
        self.search_error: Optional[Exception] = None
        self.calls: List[tuple] = []

    def _fail_if_needed(self, issue_key: str) -> None:
        if issue_key in self.failing:
            raise self.failing[issue_key]

    def search_issues(self, jql):
        self.calls.append(("search_issues", jql))
        if self.search_error is not None:
            raise self.search_error
        return [IssueRef(key=key) for key in self.issues]

    def get_issue(self, issue_key):
        self.calls.append(("get_issue", issue_key))
        if issue_key in self.issues:
            return IssueRef(key=issue_key)
        return None

    def list_available_transitions(self, issue_key):
        self.calls.append(("list_available_transitions", issue_key))
        return list(self.transitions)

    def apply_transition(self, issue_key, transition_id):
        self.calls.append(("apply_transition", issue_key, transition_id))
        self._fail_if_needed(issue_key)

    def add_comment(self, issue_key, body, visibility_role=None, visibility_group=None):
        self.calls.append(("add_comment", issue_key, body, visibility_role, visibility_group))
        self._fail_if_needed(issue_key)

    def calls_to(self, name):
        return [call for call in self.calls if call[0] == name]


def jira_issue(key, summary="Summary", status="Open"):
    return SimpleNamespace(
        key=key,
        fields=SimpleNamespace(summary=summary, status=SimpleNamespace(name=status)),
    )


class FakeJira:
    """Stands in for ``jira.JIRA`` and records requests."""

    def __init__(self, keys=("ABC-1",)):
        self.issues = {key: jira_issue(key, status="In Progress") for key in keys}
        self.transition_list = [{"id": "11", "name": "Resolve"}, {"id": "21", "name": None}]
        self.error = None
        self.failing: Dict[str, Exception] = {}
        self.requests = []

    def _maybe_fail(self, key=None):
        if self.error is not None:
            raise self.error
        if key in self.failing:
            raise self.failing[key]

    def search_issues(self, jql, maxResults=50, fields=None):
        self.requests.append(("search_issues", jql, maxResults))
        self._maybe_fail()
        return list(self.issues.values())

    def issue(self, key, fields=None):
        self.requests.append(("issue", key))
        self._maybe_fail(key)
        if key not in self.issues:
            raise JIRAError(status_code=404, text="Issue Does Not Exist")
        return self.issues[key]

    def transitions(self, key):
        self.requests.append(("transitions", key))
        self._maybe_fail(key)
        return self.transition_list

    def transition_issue(self, key, transition):
        self.requests.append(("transition_issue", key, transition))
        self._maybe_fail(key)

    def add_comment(self, key, body, visibility=None):
        self.requests.append(("add_comment", key, body, visibility))
        self._maybe_fail(key)


def fail_with(issue_key: str) -> RemoteActionError:
    return RemoteActionError(f"{issue_key} is not accessible", issue_key)


@pytest.fixture
def tracker():
    return RecordingTracker()


@pytest.fixture
def site():
    return JiraSite(name="main", url="https://jira.example.com", user_id="ci", token="t")


@pytest.fixture
def config(site):
    return AppConfig(sites=[site], jobs=[JobBinding(name="backend-build", site="main")])


@pytest.fixture
def build_log():
    return io.StringIO()
