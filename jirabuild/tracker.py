"""Capability set the updater needs from a remote issue tracker."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .model import IssueRef, TransitionCandidate


class IssueTracker(ABC):
    """Abstract remote issue tracker.

    ``JiraClient`` talks to a real Jira instance; tests provide their own
    implementation that records calls.
    """

    @abstractmethod
    def search_issues(self, jql: str) -> List[IssueRef]:
        """Return every issue matching ``jql``. Raises ``IssueSearchError``."""

    @abstractmethod
    def get_issue(self, issue_key: str) -> Optional[IssueRef]:
        """Return the issue or None when it does not exist."""

    @abstractmethod
    def list_available_transitions(self, issue_key: str) -> List[TransitionCandidate]:
        """Return the transitions the issue can take right now."""

    @abstractmethod
    def apply_transition(self, issue_key: str, transition_id: int) -> None:
        """Move the issue through a transition. Raises ``RemoteActionError``."""

    @abstractmethod
    def add_comment(
        self,
        issue_key: str,
        body: str,
        visibility_role: Optional[str] = None,
        visibility_group: Optional[str] = None,
    ) -> None:
        """Post a comment, optionally restricted to a role or group."""
