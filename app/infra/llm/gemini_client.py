from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from app.core.config import settings
from app.infra.llm.base import BaseLLMClient


class GeminiClient(BaseLLMClient):
    """Gemini 요약 모델"""

    provider = "gemini"

    def __init__(self):
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY가 설정되지 않았습니다")
        super().__init__(
            model=settings.gemini_model,
            timeout=settings.gemini_timeout,
            temperature=settings.summary_temperature,
        )
        self.api_key = settings.gemini_api_key

    def get_chat_model(self, max_tokens: int | None = None) -> BaseChatModel:
        # Gemini는 출력 길이 제한 이름이 max_output_tokens
        return ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=self.api_key,
            timeout=self.timeout,
            temperature=self.temperature,
            max_output_tokens=max_tokens,
        )
