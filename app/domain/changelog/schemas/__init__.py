from app.domain.changelog.schemas.base import (
    CompletionResult,
    MergeWindow,
    PromptRequest,
    PullRequestEvent,
    ReportState,
)
from app.domain.changelog.schemas.github import (
    CommitChanges,
    CommitRecord,
    DiffLine,
    FileDiffRecord,
    PullRequestRecord,
)

__all__ = [
    "PullRequestRecord",
    "CommitRecord",
    "FileDiffRecord",
    "DiffLine",
    "CommitChanges",
    "MergeWindow",
    "PullRequestEvent",
    "PromptRequest",
    "CompletionResult",
    "ReportState",
]
