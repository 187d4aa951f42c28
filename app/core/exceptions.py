from enum import Enum

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    LLM_ERROR = "LLM_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    DATA_PARSE_ERROR = "DATA_PARSE_ERROR"


class CustomException(Exception):
    """API 응답으로 변환되는 예외, 하위 클래스가 상태 코드와 에러 코드를 정함"""

    status_code: int = 500
    error_code: ErrorCode
    message: str

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.message)

    def to_content(self) -> dict:
        content = {"error_code": self.error_code, "message": self.message}
        # 내부 사유는 개발 환경에서만 노출
        if self.detail and not settings.is_production:
            content["detail"] = self.detail
        return content


class LLMError(CustomException):
    status_code = 502
    error_code = ErrorCode.LLM_ERROR
    message = "LLM 호출에 실패했습니다"


class ValidationError(CustomException):
    status_code = 400
    error_code = ErrorCode.INVALID_INPUT
    message = "입력값이 올바르지 않습니다"


class WebhookSignatureError(CustomException):
    status_code = 401
    error_code = ErrorCode.INVALID_SIGNATURE
    message = "Webhook 서명 검증에 실패했습니다"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        logger.warning(
            "요청 거부 path=%s error_code=%s detail=%s",
            request.url.path,
            exc.error_code.value,
            exc.detail,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())
