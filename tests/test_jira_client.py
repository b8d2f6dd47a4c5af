"""Tests for the Jira implementation of the tracker interface."""

import pytest
from jira.exceptions import JIRAError
import requests

from conftest import FakeJira

from jirabuild.exceptions import IssueSearchError, RemoteActionError, TrackerError
from jirabuild.jira_client import JiraClient


@pytest.fixture
def fake_jira():
    return FakeJira()


@pytest.fixture
def client(site, fake_jira):
    return JiraClient(site, jira=fake_jira)


def test_search_issues(client, fake_jira):
    issues = client.search_issues("project = ABC")

    assert [(i.key, i.status) for i in issues] == [("ABC-1", "In Progress")]
    assert fake_jira.requests == [("search_issues", "project = ABC", False)]


def test_search_failure(client, fake_jira):
    fake_jira.error = JIRAError(status_code=400, text="Error in the JQL Query")

    with pytest.raises(IssueSearchError):
        client.search_issues("project = ")


def test_get_issue(client):
    assert client.get_issue("ABC-1").summary == "Summary"
    assert client.get_issue("ABC-404") is None


def test_get_issue_other_errors(client, fake_jira):
    fake_jira.error = JIRAError(status_code=500, text="Internal error")

    with pytest.raises(TrackerError):
        client.get_issue("ABC-1")


def test_list_available_transitions(client):
    transitions = client.list_available_transitions("ABC-1")

    assert [(t.id, t.name) for t in transitions] == [(11, "Resolve"), (21, None)]


def test_apply_transition(client, fake_jira):
    client.apply_transition("ABC-1", 11)

    assert fake_jira.requests == [("transition_issue", "ABC-1", "11")]


def test_apply_transition_rejected(client, fake_jira):
    fake_jira.error = JIRAError(status_code=400, text="Transition id '11' is not valid")

    with pytest.raises(RemoteActionError) as excinfo:
        client.apply_transition("ABC-1", 11)
    assert excinfo.value.issue_key == "ABC-1"


def test_public_comment(client, fake_jira):
    client.add_comment("ABC-1", "hello")

    assert fake_jira.requests == [("add_comment", "ABC-1", "hello", None)]


def test_restricted_comment(client, fake_jira):
    client.add_comment("ABC-1", "to role", visibility_role="Developers")
    client.add_comment("ABC-1", "to group", visibility_role="Developers", visibility_group="jira-devs")

    assert fake_jira.requests == [
        ("add_comment", "ABC-1", "to role", {"type": "role", "value": "Developers"}),
        ("add_comment", "ABC-1", "to group", {"type": "group", "value": "jira-devs"}),
    ]


def test_comment_rejected(client, fake_jira):
    fake_jira.error = JIRAError(status_code=403, text="Forbidden")

    with pytest.raises(RemoteActionError):
        client.add_comment("ABC-1", "hello")


def test_network_error_on_comment(client, fake_jira):
    fake_jira.error = requests.exceptions.ConnectionError("read timed out")

    with pytest.raises(RemoteActionError) as excinfo:
        client.add_comment("ABC-1", "hello")
    assert excinfo.value.issue_key == "ABC-1"


def test_network_error_on_transition(client, fake_jira):
    fake_jira.error = requests.exceptions.ReadTimeout("read timed out")

    with pytest.raises(RemoteActionError):
        client.apply_transition("ABC-1", 11)


def test_network_error_on_search(client, fake_jira):
    fake_jira.error = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(IssueSearchError):
        client.search_issues("project = ABC")


def test_network_error_on_lookup(client, fake_jira):
    fake_jira.error = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(TrackerError):
        client.get_issue("ABC-1")


def test_malformed_transition(client, fake_jira):
    fake_jira.transition_list = [{"name": "Resolve"}]

    with pytest.raises(TrackerError):
        client.list_available_transitions("ABC-1")
