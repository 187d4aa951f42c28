import asyncio
import hashlib
import hmac
import json

import pydantic
from fastapi import APIRouter, Header, Request

from app.api.v1.schemas import PullRequestWebhookPayload, WebhookResponse
from app.core.config import settings
from app.core.exceptions import ValidationError, WebhookSignatureError
from app.core.limiter import limiter
from app.core.logging import get_logger
from app.domain.changelog.handler import handle_pull_request_opened
from app.domain.changelog.schemas import PullRequestEvent

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = get_logger(__name__)

HANDLED_EVENT = "pull_request"
HANDLED_ACTION = "opened"
SIGNATURE_PREFIX = "sha256="

_event_tasks: set[asyncio.Task] = set()


def verify_webhook_signature(payload: bytes, signature: str | None, secret: str) -> bool:
    """X-Hub-Signature-256 헤더 검증

    Args:
        payload: 요청 원문
        signature: "sha256=<hex>" 형식 서명
        secret: webhook secret

    Returns:
        서명이 일치하면 True
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature[len(SIGNATURE_PREFIX) :], expected)


def parse_pull_request_event(payload: dict, delivery_id: str | None) -> PullRequestEvent:
    """webhook 페이로드를 PullRequestEvent로 변환

    Raises:
        ValidationError: 레포지토리 정보가 없는 등 페이로드가 올바르지 않은 경우
    """
    try:
        data = PullRequestWebhookPayload.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(detail=f"pull_request 페이로드 오류: {e.error_count()}개 필드") from e

    return PullRequestEvent(
        action=data.action,
        repository_owner=data.repository.owner.login,
        repository_name=data.repository.name,
        pull_number=data.pull_request.number if data.pull_request else None,
        delivery_id=delivery_id,
    )


async def process_pull_request_event(event: PullRequestEvent) -> None:
    """이벤트 처리 task, 어떤 예외도 task 밖으로 전파하지 않음"""
    try:
        await handle_pull_request_opened(event)
    except Exception as e:
        logger.error("PR 이벤트 처리 실패 delivery_id=%s error=%s", event.delivery_id, e, exc_info=True)


def _schedule(event: PullRequestEvent) -> None:
    task = asyncio.create_task(process_pull_request_event(event))
    _event_tasks.add(task)
    task.add_done_callback(_event_tasks.discard)


async def drain_event_tasks(timeout: float) -> int:
    """종료 시 처리 중인 이벤트 task를 timeout까지 기다리고 남은 task는 취소

    이벤트 처리가 끝나야 요약 task가 모두 만들어지므로 요약 task 정리보다 먼저 호출한다.

    Returns:
        취소한 task 수
    """
    if not _event_tasks:
        return 0

    _, pending = await asyncio.wait(set(_event_tasks), timeout=timeout)
    for task in pending:
        task.cancel()
    if pending:
        logger.warning("종료 시 미완료 이벤트 task 취소 count=%d", len(pending))
    return len(pending)


@router.post("/github", response_model=WebhookResponse)
@limiter.limit(settings.webhook_rate_limit)
async def handle_github_webhook(
    request: Request,
    x_github_event: str | None = Header(default=None, alias="X-GitHub-Event"),
    x_github_delivery: str | None = Header(default=None, alias="X-GitHub-Delivery"),
    x_hub_signature_256: str | None = Header(default=None, alias="X-Hub-Signature-256"),
) -> WebhookResponse:
    payload = await request.body()

    if settings.webhook_secret and not verify_webhook_signature(
        payload, x_hub_signature_256, settings.webhook_secret
    ):
        logger.warning("webhook 서명 불일치 delivery_id=%s", x_github_delivery)
        raise WebhookSignatureError()

    if x_github_event != HANDLED_EVENT:
        logger.info("처리하지 않는 이벤트 event=%s", x_github_event)
        return WebhookResponse(
            status="ignored",
            message=f"{x_github_event} 이벤트는 처리하지 않습니다",
            delivery_id=x_github_delivery,
        )

    try:
        payload_json = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValidationError(detail="JSON 파싱 실패") from e
    if not isinstance(payload_json, dict):
        raise ValidationError(detail="JSON 객체가 아닙니다")

    event = parse_pull_request_event(payload_json, x_github_delivery)

    if event.action != HANDLED_ACTION:
        logger.info("처리하지 않는 PR 액션 action=%s", event.action)
        return WebhookResponse(
            status="ignored",
            message=f"pull_request.{event.action} 액션은 처리하지 않습니다",
            delivery_id=x_github_delivery,
        )

    _schedule(event)
    logger.info(
        "PR opened 이벤트 접수 repo=%s/%s pr=%s",
        event.repository_owner,
        event.repository_name,
        event.pull_number,
    )

    return WebhookResponse(
        status="accepted",
        message="pull_request.opened 이벤트를 접수했습니다",
        delivery_id=x_github_delivery,
    )
