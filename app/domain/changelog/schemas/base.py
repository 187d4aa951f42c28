from datetime import datetime, timezone
from typing import TypedDict

from pydantic import BaseModel, ConfigDict, field_validator


class MergeWindow(BaseModel):
    """리포트 대상 merge 기간, 양 끝 포함"""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """timezone 없는 값은 UTC로 간주"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def is_empty(self) -> bool:
        return self.start > self.end


class PullRequestEvent(BaseModel):
    """pull_request webhook 이벤트"""

    action: str
    repository_owner: str
    repository_name: str
    pull_number: int | None = None
    delivery_id: str | None = None


class PromptRequest(BaseModel):
    """요약 요청 프롬프트"""

    instruction_template: str
    change_log: str
    max_output_tokens: int

    @property
    def text(self) -> str:
        return f"{self.instruction_template}{self.change_log}"


class CompletionResult(BaseModel):
    """요약 결과"""

    text: str


class ReportState(TypedDict, total=False):
    """LangGraph 워크플로우 상태"""

    event: PullRequestEvent
    window: MergeWindow
    token: str | None
    pull_count: int
    change_log: str
    prompt: PromptRequest
    error_code: str
    error_message: str
