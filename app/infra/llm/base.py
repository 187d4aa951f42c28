from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel


class BaseLLMClient(ABC):
    """변경 요약용 채팅 모델 공급자"""

    provider: str

    def __init__(self, model: str, timeout: float, temperature: float):
        self.model = model
        self.timeout = timeout
        self.temperature = temperature

    @abstractmethod
    def get_chat_model(self, max_tokens: int | None = None) -> BaseChatModel:
        """요약 요청 하나에 쓸 채팅 모델 생성, max_tokens로 출력 길이 제한"""

    def get_model_name(self) -> str:
        return self.model
