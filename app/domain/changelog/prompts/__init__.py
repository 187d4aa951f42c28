from app.domain.changelog.prompts.summary import (
    CHANGE_SUMMARY_INSTRUCTION,
    CHANGE_SUMMARY_MAX_TOKENS,
)
from app.domain.changelog.schemas import PromptRequest


def build_prompt_request(
    change_log: str, max_output_tokens: int = CHANGE_SUMMARY_MAX_TOKENS
) -> PromptRequest:
    """변경 로그를 요약 지시문에 붙여 요약 요청 생성"""
    return PromptRequest(
        instruction_template=CHANGE_SUMMARY_INSTRUCTION,
        change_log=change_log,
        max_output_tokens=max_output_tokens,
    )


__all__ = [
    "CHANGE_SUMMARY_INSTRUCTION",
    "CHANGE_SUMMARY_MAX_TOKENS",
    "build_prompt_request",
]
