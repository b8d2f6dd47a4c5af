"""Progress every issue of a build in one batch."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, TextIO

from .common import log_build_message
from .config import JiraSite
from .exceptions import TrackerError
from .extractor import find_issue_ids
from .jira_client import JiraClient
from .model import ChangeEntry, IssueOutcome, ProgressRequest
from .progressor import IssueProgressor
from .tracker import IssueTracker

logger = logging.getLogger(__name__)

TrackerFactory = Callable[[JiraSite], IssueTracker]


class IssueUpdater:
    """Runs one progress request against all issues of a batch.

    The batch succeeds when it runs to completion. Failures on single issues
    are logged and collected in ``outcomes``; only a missing site makes the
    batch fail, and a failing search propagates to the caller.
    """

    def __init__(
        self,
        site: Optional[JiraSite],
        log: Optional[TextIO] = None,
        tracker_factory: TrackerFactory = JiraClient,
    ) -> None:
        self.site = site
        self.log = log
        self.tracker_factory = tracker_factory
        self.outcomes: List[IssueOutcome] = []
        self._tracker: Optional[IssueTracker] = None

    @property
    def tracker(self) -> IssueTracker:
        if self._tracker is None:
            self._tracker = self.tracker_factory(self.site)
        return self._tracker

    def _site_missing(self) -> bool:
        if self.site is not None:
            return False
        logger.warning("No Jira site is configured for this job")
        log_build_message(self.log, "No Jira site is configured for this job; issues were not updated.")
        return True

    def _announce(self, request: ProgressRequest) -> None:
        if not request.wants_transition:
            log_build_message(
                self.log,
                "No workflow action was specified, thus no status update will be made for any of the matching issues.",
            )

    def _progress_all(self, issue_keys: Iterable[str], request: ProgressRequest) -> None:
        progressor = IssueProgressor(self.tracker, self.log, self.site)
        for issue_key in issue_keys:
            self.outcomes.append(progressor.progress(issue_key, request))

    def progress_matching_issues(
        self,
        search_query: str,
        workflow_action_name: Optional[str],
        comment_text: Optional[str],
    ) -> bool:
        """Progress every issue returned by ``search_query``."""
        if self._site_missing():
            return False

        request = ProgressRequest(
            search_query=search_query,
            workflow_action_name=workflow_action_name,
            comment_text=comment_text,
        )
        issues = self.tracker.search_issues(search_query)
        logger.info(f"Query '{search_query}' matched {len(issues)} issue(s)")
        self._announce(request)
        self._progress_all((issue.key for issue in issues), request)
        return True

    def progress_changelog_issues(
        self,
        entries: Iterable[ChangeEntry],
        workflow_action_name: Optional[str],
        comment_text: Optional[str],
    ) -> bool:
        """Progress the issues referenced in a change-log.

        Identifiers that do not name an existing issue are skipped.
        """
        if self._site_missing():
            return False

        request = ProgressRequest(
            workflow_action_name=workflow_action_name,
            comment_text=comment_text,
        )
        ids = sorted(find_issue_ids(entries, self.site.pattern))
        logger.info(f"Change-log references {len(ids)} issue id(s)")
        self._announce(request)

        existing = []
        for issue_id in ids:
            try:
                issue = self.tracker.get_issue(issue_id)
            except TrackerError as e:
                logger.error(f"Failed to look up {issue_id}: {e}")
                log_build_message(self.log, f"Failed to look up issue {issue_id}: {e}")
                continue
            if issue is None:
                log_build_message(self.log, f"{issue_id} does not match an existing issue; skipped.")
                continue
            existing.append(issue.key)

        self._progress_all(existing, request)
        return True
