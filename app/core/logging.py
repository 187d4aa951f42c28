"""
structlog 기반 로깅 설정

- 개발 환경: 컬러 콘솔 출력
- 프로덕션 환경: JSON 한 줄 출력
- request_id, webhook delivery_id 자동 주입
- 토큰/서명 마스킹, 변경 로그처럼 긴 필드는 잘라서 기록
"""

import logging
import re
import sys

import structlog

from app.core.config import settings
from app.core.context import get_delivery_id, get_request_id

SENSITIVE_PATTERNS = [
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}"), "gh*_***"),
    (re.compile(r"\bsk-[A-Za-z0-9_-]{16,}"), "sk-***"),
    (re.compile(r"(Bearer\s+)[^\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(sha256=)[0-9a-f]+", re.IGNORECASE), r"\1***"),
]

# 변경 로그, 요약 본문 등 값이 큰 필드
LONG_FIELDS = ("change_log", "summary", "prompt")

NOISY_LOGGERS = (
    "httpcore",
    "httpx",
    "langfuse",
    "langchain",
    "langchain_google_genai",
    "langgraph",
    "openai",
    "google_genai",
    "anyio",
)


def _mask_sensitive_data(value: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """request_id와 delivery_id를 로그에 주입, 명시적으로 넘긴 값이 우선"""
    request_id = get_request_id()
    delivery_id = get_delivery_id()

    if request_id:
        event_dict.setdefault("request_id", request_id)
    if delivery_id:
        event_dict.setdefault("delivery_id", delivery_id)

    return event_dict


def truncate_long_fields_processor(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """LONG_FIELDS 값이 log_field_max_length를 넘으면 잘라냄"""
    limit = settings.log_field_max_length
    if limit <= 0:
        return event_dict

    for key in LONG_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > limit:
            event_dict[key] = f"{value[:limit]}... ({len(value) - limit} chars truncated)"

    return event_dict


def mask_sensitive_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """프로덕션에서 토큰, 서명 마스킹"""
    if not settings.is_production:
        return event_dict

    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _mask_sensitive_data(value)

    return event_dict


def _shared_processors() -> list:
    processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        truncate_long_fields_processor,
        mask_sensitive_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer():
    if settings.is_production:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(level: str | None = None) -> None:
    """structlog과 stdlib logging을 같은 포맷터로 초기화"""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    shared_processors = _shared_processors()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn 로그도 root 핸들러 하나로 출력
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
