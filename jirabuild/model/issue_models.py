"""Pydantic models for change-logs, issues and workflow transitions."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChangeEntry(BaseModel):
    """One change-log record, usually a commit message."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    msg: str = ""
    author: Optional[str] = None
    affected_paths: List[str] = Field(default_factory=list)
    commit_id: Optional[str] = None


class IssueRef(BaseModel):
    """Issue returned by a search or lookup."""
    model_config = ConfigDict(extra="ignore")

    key: str
    summary: Optional[str] = None
    status: Optional[str] = None


class TransitionCandidate(BaseModel):
    """Workflow transition currently available for an issue."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def _id_required_with_name(self) -> "TransitionCandidate":
        if self.name is not None and self.id is None:
            raise ValueError(f"transition '{self.name}' has no id")
        return self


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class ProgressRequest(BaseModel):
    """What to do with every issue of a batch.

    Blank strings are treated the same as missing values: a blank action
    name means no transition, a blank comment means no comment.
    """
    model_config = ConfigDict(frozen=True)

    search_query: Optional[str] = None
    workflow_action_name: Optional[str] = None
    comment_text: Optional[str] = None

    @property
    def wants_transition(self) -> bool:
        return not _is_blank(self.workflow_action_name)

    @property
    def wants_comment(self) -> bool:
        return not _is_blank(self.comment_text)


class IssueOutcome(BaseModel):
    """Record of what happened to a single issue."""

    issue_key: str
    transition_id: Optional[int] = None
    transitioned: bool = False
    commented: bool = False
    errors: List[str] = Field(default_factory=list)

    @property
    def error(self) -> Optional[str]:
        return "; ".join(self.errors) if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors
