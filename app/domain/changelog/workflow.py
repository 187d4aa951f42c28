from typing import Literal

import httpx
from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from app.core.config import settings
from app.core.exceptions import ErrorCode
from app.core.logging import get_logger
from app.domain.changelog.prompts import build_prompt_request
from app.domain.changelog.schemas import ReportState
from app.domain.changelog.service import build_change_log

logger = get_logger(__name__)


async def collect_changes_node(state: ReportState) -> ReportState:
    """변경 수집 노드: 기간 내 merge PR의 변경 로그 조립"""
    event = state["event"]
    window = state["window"]
    owner, repo = event.repository_owner, event.repository_name
    logger.info(
        "collect_changes_node 시작 repo=%s/%s start=%s end=%s",
        owner,
        repo,
        window.start.isoformat(),
        window.end.isoformat(),
    )

    try:
        change_log, pull_count = await build_change_log(
            owner, repo, window, state.get("token")
        )

        logger.info("collect_changes_node 완료 pulls=%d", pull_count)
        return {
            **state,
            "change_log": change_log,
            "pull_count": pull_count,
        }

    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.error("collect_changes_node HTTP 오류 status=%d", status_code)
        return {
            **state,
            "error_code": ErrorCode.GITHUB_API_ERROR,
            "error_message": f"GitHub API 오류: HTTP {status_code}",
        }

    except httpx.RequestError as e:
        logger.error("collect_changes_node 요청 실패 error=%s", type(e).__name__)
        return {
            **state,
            "error_code": ErrorCode.GITHUB_API_ERROR,
            "error_message": f"GitHub API 요청 실패: {type(e).__name__}",
        }

    except (KeyError, TypeError, ValueError) as e:
        logger.error("collect_changes_node 데이터 오류 error=%s", e, exc_info=True)
        return {
            **state,
            "error_code": ErrorCode.DATA_PARSE_ERROR,
            "error_message": f"GitHub 응답 파싱 오류: {e}",
        }


async def build_prompt_node(state: ReportState) -> ReportState:
    """프롬프트 생성 노드: 변경 로그를 요약 요청으로 변환"""
    prompt = build_prompt_request(state["change_log"], settings.summary_max_tokens)
    logger.info("build_prompt_node 완료 prompt_length=%d", len(prompt.text))
    return {**state, "prompt": prompt}


def should_build_prompt(state: ReportState) -> Literal["build_prompt", "end"]:
    """에러 상태 확인: 에러 있으면 종료, 없으면 프롬프트 생성"""
    if state.get("error_code"):
        logger.info("should_build_prompt: 에러 발생, 종료")
        return "end"
    return "build_prompt"


def create_report_workflow() -> CompiledStateGraph:
    """변경 리포트 워크플로우 생성"""
    workflow = StateGraph(ReportState)

    workflow.add_node("collect_changes", collect_changes_node)
    workflow.add_node("build_prompt", build_prompt_node)

    workflow.set_entry_point("collect_changes")

    workflow.add_conditional_edges(
        "collect_changes",
        should_build_prompt,
        {
            "build_prompt": "build_prompt",
            "end": END,
        },
    )
    workflow.add_edge("build_prompt", END)

    return workflow.compile()
