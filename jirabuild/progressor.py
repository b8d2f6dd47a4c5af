"""Apply a workflow transition and a comment to a single issue."""

from __future__ import annotations

import logging
from typing import Optional, TextIO

from .common import log_build_message
from .config import JiraSite
from .exceptions import TrackerError
from .model import IssueOutcome, ProgressRequest
from .resolver import resolve_transition_id
from .tracker import IssueTracker

logger = logging.getLogger(__name__)


class IssueProgressor:
    """Moves one issue at a time through its workflow.

    Errors raised by the tracker for an issue are logged and recorded in the
    returned ``IssueOutcome``; they never escape ``progress``.
    """

    def __init__(
        self,
        tracker: IssueTracker,
        log: Optional[TextIO] = None,
        site: Optional[JiraSite] = None,
    ) -> None:
        self.tracker = tracker
        self.log = log
        self.visibility_role = site.comment_visibility_role if site else None
        self.visibility_group = site.comment_visibility_group if site else None

    def action_id_for_issue(self, issue_key: str, workflow_action: Optional[str]) -> Optional[int]:
        """Look up the id of ``workflow_action`` among the issue's transitions."""
        if workflow_action is None or not workflow_action.strip():
            return None
        available = self.tracker.list_available_transitions(issue_key)
        return resolve_transition_id(available, workflow_action)

    def progress(self, issue_key: str, request: ProgressRequest) -> IssueOutcome:
        outcome = IssueOutcome(issue_key=issue_key)
        if not request.wants_transition and not request.wants_comment:
            return outcome

        if request.wants_transition:
            try:
                self._transition(issue_key, request.workflow_action_name, outcome)
            except TrackerError as e:
                self._failed(issue_key, "progress", e, outcome)

        if request.wants_comment:
            try:
                self.tracker.add_comment(
                    issue_key,
                    request.comment_text,
                    self.visibility_role,
                    self.visibility_group,
                )
            except TrackerError as e:
                self._failed(issue_key, "comment on", e, outcome)
            else:
                outcome.commented = True
                logger.info(f"Commented on {issue_key}")
                log_build_message(self.log, f"Comment added to issue {issue_key}.")

        return outcome

    def _failed(self, issue_key: str, what: str, error: TrackerError, outcome: IssueOutcome) -> None:
        outcome.errors.append(str(error))
        logger.error(f"Failed to {what} issue {issue_key}: {error}")
        log_build_message(self.log, f"Failed to {what} issue {issue_key}: {error}")

    def _transition(self, issue_key: str, action: str, outcome: IssueOutcome) -> None:
        action_id = self.action_id_for_issue(issue_key, action)
        if action_id is None:
            logger.warning(f"Workflow action '{action}' is not available for {issue_key}")
            log_build_message(
                self.log,
                f"Unable to find workflow action \"{action}\" for issue {issue_key}; status left unchanged.",
            )
            return

        outcome.transition_id = action_id
        self.tracker.apply_transition(issue_key, action_id)
        outcome.transitioned = True
        logger.info(f"Transitioned {issue_key} with action {action_id}")
        log_build_message(self.log, f"Issue {issue_key} progressed with workflow action \"{action}\".")
