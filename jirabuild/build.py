"""Build steps that update Jira issues after a build."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from string import Template
from typing import Dict, List, Optional, TextIO

from .config import AppConfig
from .jira_client import JiraClient
from .model import ChangeEntry, IssueOutcome
from .updater import IssueUpdater, TrackerFactory


class BuildResult(str, Enum):
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"


@dataclass
class Build:
    """The parts of a running build the issue updater needs."""

    job_name: str
    environment: Dict[str, str] = field(default_factory=dict)
    change_log: List[ChangeEntry] = field(default_factory=list)
    log: TextIO = field(default_factory=lambda: sys.stdout)
    result: BuildResult = BuildResult.SUCCESS

    def expand(self, value: Optional[str]) -> Optional[str]:
        """Substitute ``$VAR`` and ``${VAR}`` from the build environment."""
        if value is None:
            return None
        return Template(value).safe_substitute(self.environment)


@dataclass
class PostBuildIssueUpdate:
    """Progress the issues matching a JQL query."""

    jql: str
    workflow_action: Optional[str] = None
    comment: Optional[str] = None
    outcomes: List[IssueOutcome] = field(default_factory=list, init=False, repr=False)

    def perform(
        self,
        build: Build,
        config: AppConfig,
        tracker_factory: TrackerFactory = JiraClient,
    ) -> bool:
        updater = IssueUpdater(config.site_for_job(build.job_name), build.log, tracker_factory)
        ok = updater.progress_matching_issues(
            build.expand(self.jql),
            build.expand(self.workflow_action),
            build.expand(self.comment),
        )
        self.outcomes = updater.outcomes
        if not ok:
            build.result = BuildResult.FAILURE
        return ok


@dataclass
class ChangelogIssueUpdate:
    """Progress the issues referenced by the build's change-log."""

    workflow_action: Optional[str] = None
    comment: Optional[str] = None
    outcomes: List[IssueOutcome] = field(default_factory=list, init=False, repr=False)

    def perform(
        self,
        build: Build,
        config: AppConfig,
        tracker_factory: TrackerFactory = JiraClient,
    ) -> bool:
        updater = IssueUpdater(config.site_for_job(build.job_name), build.log, tracker_factory)
        ok = updater.progress_changelog_issues(
            build.change_log,
            build.expand(self.workflow_action),
            build.expand(self.comment),
        )
        self.outcomes = updater.outcomes
        if not ok:
            build.result = BuildResult.FAILURE
        return ok
