import os

from langchain_core.messages import HumanMessage
from langfuse.langchain import CallbackHandler

from app.core.config import settings
from app.core.exceptions import LLMError
from app.core.logging import get_logger
from app.domain.changelog.schemas import CompletionResult, PromptRequest
from app.infra.llm.factory import get_summarizer_client

logger = get_logger(__name__)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def _extract_text(content: str | list) -> str:
    """모델 응답 content에서 텍스트만 추출"""
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


async def summarize_changes(
    prompt: PromptRequest, session_id: str | None = None
) -> CompletionResult:
    """변경 로그 요약 요청.

    Args:
        prompt: 요약 요청 프롬프트
        session_id: Langfuse 세션 ID, 보통 webhook delivery_id

    Returns:
        첫 번째 응답의 텍스트

    Raises:
        LLMError: 프로바이더 호출이 실패했거나 응답 텍스트가 비어 있는 경우
    """
    client = get_summarizer_client()
    logger.debug(
        "변경 요약 요청 model=%s prompt_length=%d max_tokens=%d",
        client.get_model_name(),
        len(prompt.text),
        prompt.max_output_tokens,
    )

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["changelog", "summarize"],
        },
    }

    llm = client.get_chat_model(max_tokens=prompt.max_output_tokens)
    try:
        result = await llm.ainvoke([HumanMessage(content=prompt.text)], config=config)
    except Exception as e:
        raise LLMError(f"{type(e).__name__}: {e}") from e

    text = _extract_text(result.content)
    if not text.strip():
        raise LLMError("요약 응답이 비어 있습니다")

    logger.debug("변경 요약 완료 length=%d", len(text))
    return CompletionResult(text=text)
