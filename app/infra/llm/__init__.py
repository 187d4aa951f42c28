from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import summarize_changes
from app.infra.llm.factory import PROVIDERS, get_summarizer_client, reset_clients
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient
from app.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_summarizer_client",
    "PROVIDERS",
    "reset_clients",
    "summarize_changes",
]
