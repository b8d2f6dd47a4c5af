"""jirabuild - update Jira issues from build results.

- jirabuild.extractor: find issue identifiers in change-log text
- jirabuild.resolver: pick a workflow transition by name
- jirabuild.progressor / jirabuild.updater: apply transitions and comments
- jirabuild.build: build steps wiring the above to a job's configuration
"""

__version__ = "1.0.0"

from .extractor import DEFAULT_ISSUE_PATTERN, extract_identifiers, find_issue_ids
from .resolver import resolve_transition_id
from .tracker import IssueTracker
from .updater import IssueUpdater

__all__ = [
    "DEFAULT_ISSUE_PATTERN",
    "extract_identifiers",
    "find_issue_ids",
    "resolve_transition_id",
    "IssueTracker",
    "IssueUpdater",
]
