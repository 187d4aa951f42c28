from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class PullRequestRecord(BaseModel):
    """PR 기본 정보"""

    model_config = ConfigDict(frozen=True)

    number: int
    merged_at: datetime | None = None
    updated_at: datetime | None = None
    repository_owner: str
    repository_name: str


class CommitRecord(BaseModel):
    """PR에 속한 커밋"""

    model_config = ConfigDict(frozen=True)

    sha: str
    pull_request: PullRequestRecord


class FileDiffRecord(BaseModel):
    """커밋에서 변경된 파일, 바이너리 등 diff가 없으면 patch는 None"""

    model_config = ConfigDict(frozen=True)

    filename: str
    patch: str | None = None


class DiffLine(BaseModel):
    """patch에서 추출한 추가/삭제 라인"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["added", "removed"]
    content: str


class CommitChanges(BaseModel):
    """커밋과 변경 파일 목록"""

    commit: CommitRecord
    files: list[FileDiffRecord]
