"""Custom exceptions for jirabuild"""


class JiraBuildError(Exception):
    """Base exception for jirabuild"""
    pass


class ConfigError(JiraBuildError):
    """Raised when configuration cannot be loaded or is invalid"""
    pass


class TrackerError(JiraBuildError):
    """Base exception for remote issue tracker failures"""

    def __init__(self, message: str, issue_key: str | None = None):
        super().__init__(message)
        self.issue_key = issue_key


class IssueSearchError(TrackerError):
    """Raised when the issue search itself fails"""
    pass


class RemoteActionError(TrackerError):
    """Raised when a transition or comment is rejected for an issue"""
    pass


class ChangelogError(JiraBuildError):
    """Raised when the change-log cannot be read"""
    pass
