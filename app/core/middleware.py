"""
HTTP 요청 로깅 미들웨어

요청마다 request_id를 만들고, GitHub webhook 요청이면 X-GitHub-Delivery를
delivery_id로 묶어 이후 백그라운드 처리 로그까지 같은 값으로 추적한다.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.context import clear_context, set_delivery_id, set_request_id
from app.core.logging import get_logger

logger = get_logger(__name__)

SKIP_PATHS = {"/health", "/docs", "/openapi.json", "/redoc", "/favicon.ico"}

GITHUB_EVENT_HEADER = "X-GitHub-Event"
GITHUB_DELIVERY_HEADER = "X-GitHub-Delivery"
GITHUB_HOOK_ID_HEADER = "X-GitHub-Hook-ID"


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _request_fields(request: Request) -> dict:
    """요청 로그 필드, webhook 요청이면 GitHub 헤더 포함"""
    fields = {"method": request.method, "path": request.url.path}

    event = request.headers.get(GITHUB_EVENT_HEADER)
    if event:
        fields["github_event"] = event
        fields["hook_id"] = request.headers.get(GITHUB_HOOK_ID_HEADER)
    else:
        fields["client_ip"] = _client_ip(request)

    return fields


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """request_id/delivery_id 컨텍스트 설정과 요청 단위 로깅"""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        request_id = set_request_id(request.headers.get("X-Request-ID"))
        delivery_id = request.headers.get(GITHUB_DELIVERY_HEADER)
        set_delivery_id(delivery_id)

        fields = _request_fields(request)
        start_time = time.perf_counter()
        logger.info("webhook 수신" if "github_event" in fields else "요청 시작", **fields)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "요청 실패",
                error=str(e),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                **fields,
            )
            raise
        finally:
            clear_context()

        logger.info(
            "요청 완료",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            delivery_id=delivery_id,
            request_id=request_id,
            **fields,
        )

        response.headers["X-Request-ID"] = request_id
        return response
