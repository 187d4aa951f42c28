import asyncio

from app.core.config import settings
from app.core.context import delivery_context
from app.core.logging import get_logger
from app.domain.changelog.schemas import (
    MergeWindow,
    PromptRequest,
    PullRequestEvent,
    ReportState,
)
from app.domain.changelog.workflow import create_report_workflow
from app.infra.llm.client import summarize_changes

logger = get_logger(__name__)

_summary_tasks: set[asyncio.Task] = set()


def default_window() -> MergeWindow:
    """설정에 지정된 리포트 기간"""
    return MergeWindow(start=settings.report_start_date, end=settings.report_end_date)


async def _summarize_and_log(prompt: PromptRequest, delivery_id: str | None) -> None:
    """요약 요청 후 결과를 로그로 남김, 실패는 기록만 하고 전파하지 않음"""
    with delivery_context(delivery_id):
        try:
            result = await summarize_changes(prompt, session_id=delivery_id)
        except Exception as e:
            logger.error("변경 요약 실패 error_type=%s error=%s", type(e).__name__, e)
            return
        logger.info("변경 요약 수신 length=%d", len(result.text), summary=result.text)


def dispatch_summary(prompt: PromptRequest, delivery_id: str | None = None) -> asyncio.Task:
    """요약 작업을 분리된 task로 시작, 호출자는 결과를 기다리지 않음"""
    task = asyncio.create_task(_summarize_and_log(prompt, delivery_id))
    _summary_tasks.add(task)
    task.add_done_callback(_summary_tasks.discard)
    return task


async def drain_summary_tasks(timeout: float) -> int:
    """종료 시 진행 중인 요약 task를 timeout까지 기다리고 남은 task는 취소

    Returns:
        취소한 task 수
    """
    if not _summary_tasks:
        return 0

    _, pending = await asyncio.wait(set(_summary_tasks), timeout=timeout)
    for task in pending:
        task.cancel()
    if pending:
        logger.warning("종료 시 미완료 요약 task 취소 count=%d", len(pending))
    return len(pending)


async def handle_pull_request_opened(
    event: PullRequestEvent,
    window: MergeWindow | None = None,
    token: str | None = None,
) -> ReportState:
    """PR opened 이벤트 처리.

    변경 로그를 조립해 요약 요청을 만들고, 요약은 분리된 task로 넘긴다.
    변경 로그 조립이 실패하면 요약 요청을 만들지 않는다.

    Args:
        event: pull_request webhook 이벤트
        window: merge 기간, 없으면 설정값 사용
        token: GitHub 토큰, 없으면 설정값 사용

    Returns:
        워크플로우 최종 상태
    """
    window = window or default_window()

    with delivery_context(event.delivery_id):
        logger.info(
            "PR opened 이벤트 처리 시작 repo=%s/%s pr=%s",
            event.repository_owner,
            event.repository_name,
            event.pull_number,
        )

        workflow = create_report_workflow()
        state = await workflow.ainvoke(ReportState(event=event, window=window, token=token))

        if state.get("error_code"):
            logger.error(
                "변경 리포트 생성 실패 error_code=%s error=%s",
                state["error_code"],
                state.get("error_message"),
            )
            return state

        dispatch_summary(state["prompt"], event.delivery_id)
        logger.info("PR opened 이벤트 처리 완료 pulls=%d", state.get("pull_count", 0))

    return state
