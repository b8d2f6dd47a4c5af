"""Data models shared by the extractor, resolver and updater."""

from .issue_models import (
    ChangeEntry,
    IssueRef,
    TransitionCandidate,
    ProgressRequest,
    IssueOutcome,
)

__all__ = [
    "ChangeEntry",
    "IssueRef",
    "TransitionCandidate",
    "ProgressRequest",
    "IssueOutcome",
]
