from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.infra.llm.base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI Chat Completions 요약 모델"""

    provider = "openai"

    def __init__(self):
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY가 설정되지 않았습니다")
        super().__init__(
            model=settings.openai_model,
            timeout=settings.openai_timeout,
            temperature=settings.summary_temperature,
        )
        self.api_key = settings.openai_api_key

    def get_chat_model(self, max_tokens: int | None = None) -> BaseChatModel:
        return ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            timeout=self.timeout,
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
