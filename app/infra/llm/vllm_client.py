from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.infra.llm.base import BaseLLMClient


class VLLMClient(BaseLLMClient):
    """OpenAI 호환 엔드포인트(vLLM, RunPod 등)로 요약하는 모델"""

    provider = "vllm"

    def __init__(self):
        if not settings.vllm_api_url:
            raise ValueError("VLLM_API_URL이 설정되지 않았습니다")
        super().__init__(
            model=settings.vllm_model,
            timeout=settings.vllm_timeout,
            temperature=settings.summary_temperature,
        )
        self.base_url = settings.vllm_api_url
        # vLLM은 키 없이 띄우는 경우가 많지만 ChatOpenAI는 빈 키를 거부함
        self.api_key = settings.vllm_api_key or "EMPTY"

    def get_chat_model(self, max_tokens: int | None = None) -> BaseChatModel:
        return ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
