from app.core.config import settings
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

PROVIDERS: dict[str, type[BaseLLMClient]] = {
    client_cls.provider: client_cls for client_cls in (OpenAIClient, VLLMClient, GeminiClient)
}

_summarizer_client: BaseLLMClient | None = None


def get_summarizer_client() -> BaseLLMClient:
    """설정된 프로바이더의 변경 요약 클라이언트 반환, 최초 호출 시 생성 후 재사용

    Raises:
        ValueError: 지원하지 않는 프로바이더이거나 필수 설정이 없는 경우
    """
    global _summarizer_client

    if _summarizer_client is not None:
        return _summarizer_client

    provider = settings.llm_provider.lower()
    client_cls = PROVIDERS.get(provider)
    if client_cls is None:
        raise ValueError(
            f"지원하지 않는 LLM 프로바이더: {provider} (가능: {', '.join(PROVIDERS)})"
        )

    _summarizer_client = client_cls()
    logger.info(
        "요약 클라이언트 초기화 provider=%s model=%s",
        provider,
        _summarizer_client.get_model_name(),
    )
    return _summarizer_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화, 설정 변경 후나 테스트에서 사용"""
    global _summarizer_client
    _summarizer_client = None
