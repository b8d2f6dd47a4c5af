"""Jira implementation of the issue tracker interface."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from jira import JIRA
from jira.exceptions import JIRAError
from pydantic import ValidationError
from requests.exceptions import RequestException

from .config import JiraSite
from .exceptions import IssueSearchError, RemoteActionError, TrackerError
from .model import IssueRef, TransitionCandidate
from .tracker import IssueTracker

logger = logging.getLogger(__name__)

# Errors the jira library lets through: HTTP errors it wraps and transport errors it does not
REMOTE_ERRORS = (JIRAError, RequestException)


def _issue_ref(issue: Any) -> IssueRef:
    fields = getattr(issue, "fields", None)
    status = getattr(fields, "status", None)
    return IssueRef(
        key=issue.key,
        summary=getattr(fields, "summary", None),
        status=getattr(status, "name", None),
    )


def _describe(error: Exception) -> str:
    text = getattr(error, "text", None) or str(error)
    status = getattr(error, "status_code", None)
    return f"HTTP {status}: {text}" if status else text


class JiraClient(IssueTracker):
    """Thin wrapper around the Jira API."""

    def __init__(self, site: JiraSite, jira: Optional[JIRA] = None) -> None:
        self.site = site
        if jira is None:
            try:
                jira = JIRA(server=site.url, basic_auth=(site.user_id, site.token))
            except REMOTE_ERRORS as e:
                logger.error(f"Failed to connect to Jira: {e}")
                raise TrackerError(f"Cannot connect to {site.url}: {_describe(e)}") from e
            logger.info(f"Connected to Jira site {site.name} at {site.url}")
        self._jira = jira

    def search_issues(self, jql: str) -> List[IssueRef]:
        try:
            issues = self._jira.search_issues(jql, maxResults=False, fields="summary,status")
        except REMOTE_ERRORS as e:
            logger.error(f"Failed to search issues with JQL '{jql}': {e}")
            raise IssueSearchError(f"Search '{jql}' failed: {_describe(e)}") from e
        return [_issue_ref(issue) for issue in issues]

    def get_issue(self, issue_key: str) -> Optional[IssueRef]:
        try:
            issue = self._jira.issue(issue_key, fields="summary,status")
        except REMOTE_ERRORS as e:
            if getattr(e, "status_code", None) == 404:
                return None
            raise TrackerError(f"Cannot fetch {issue_key}: {_describe(e)}", issue_key) from e
        return _issue_ref(issue)

    def list_available_transitions(self, issue_key: str) -> List[TransitionCandidate]:
        try:
            transitions: List[Dict[str, Any]] = self._jira.transitions(issue_key)
        except REMOTE_ERRORS as e:
            raise TrackerError(
                f"Cannot list transitions of {issue_key}: {_describe(e)}", issue_key
            ) from e
        try:
            return [
                TransitionCandidate(id=t.get("id"), name=t.get("name"))
                for t in transitions or []
            ]
        except ValidationError as e:
            raise TrackerError(f"Malformed transition list for {issue_key}: {e}", issue_key) from e

    def apply_transition(self, issue_key: str, transition_id: int) -> None:
        try:
            self._jira.transition_issue(issue_key, str(transition_id))
        except REMOTE_ERRORS as e:
            raise RemoteActionError(
                f"Transition {transition_id} rejected for {issue_key}: {_describe(e)}",
                issue_key,
            ) from e

    def add_comment(
        self,
        issue_key: str,
        body: str,
        visibility_role: Optional[str] = None,
        visibility_group: Optional[str] = None,
    ) -> None:
        visibility = None
        # Jira accepts a single restriction; a group takes precedence over a role
        if visibility_group:
            visibility = {"type": "group", "value": visibility_group}
        elif visibility_role:
            visibility = {"type": "role", "value": visibility_role}
        try:
            self._jira.add_comment(issue_key, body, visibility=visibility)
        except REMOTE_ERRORS as e:
            raise RemoteActionError(
                f"Comment rejected for {issue_key}: {_describe(e)}", issue_key
            ) from e
