"""워크플로우 노드 함수 테스트"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.core.exceptions import ErrorCode
from app.domain.changelog.prompts import CHANGE_SUMMARY_INSTRUCTION
from app.domain.changelog.schemas import ReportState
from app.domain.changelog.workflow import (
    build_prompt_node,
    collect_changes_node,
    create_report_workflow,
    should_build_prompt,
)


@pytest.fixture
def initial_state(sample_event, sample_window) -> ReportState:
    """워크플로우 초기 상태"""
    return ReportState(event=sample_event, window=sample_window, token=None)


class TestCollectChangesNode:
    """collect_changes_node 함수 테스트"""

    @pytest.mark.asyncio
    async def test_success(self, initial_state, sample_window):
        """정상 변경 로그 수집"""
        with patch(
            "app.domain.changelog.workflow.build_change_log",
            new_callable=AsyncMock,
            return_value=("---> Pull Request #1:\n", 1),
        ) as mock_build:
            result = await collect_changes_node(initial_state)

        assert result["change_log"] == "---> Pull Request #1:\n"
        assert result["pull_count"] == 1
        assert result.get("error_code") is None
        mock_build.assert_awaited_once_with("octo", "repo", sample_window, None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,expected_code,expected_msg_part",
        [
            (
                httpx.HTTPStatusError(
                    "Not Found",
                    request=httpx.Request("GET", "test"),
                    response=httpx.Response(404, request=httpx.Request("GET", "test")),
                ),
                ErrorCode.GITHUB_API_ERROR,
                "HTTP 404",
            ),
            (
                httpx.ConnectError("connection refused"),
                ErrorCode.GITHUB_API_ERROR,
                "ConnectError",
            ),
            (KeyError("number"), ErrorCode.DATA_PARSE_ERROR, "파싱 오류"),
        ],
        ids=["github_http_error", "github_request_error", "bad_payload"],
    )
    async def test_errors(self, initial_state, error, expected_code, expected_msg_part):
        """에러는 상태에 기록하고 예외를 전파하지 않음"""
        with patch(
            "app.domain.changelog.workflow.build_change_log",
            new_callable=AsyncMock,
            side_effect=error,
        ):
            result = await collect_changes_node(initial_state)

        assert result["error_code"] == expected_code
        assert expected_msg_part in result["error_message"]
        assert "change_log" not in result


class TestBuildPromptNode:
    """build_prompt_node 함수 테스트"""

    @pytest.mark.asyncio
    async def test_builds_prompt(self, initial_state):
        state = {**initial_state, "change_log": "---> Pull Request #1:\n"}

        with patch("app.domain.changelog.workflow.settings") as mock_settings:
            mock_settings.summary_max_tokens = 300
            result = await build_prompt_node(state)

        assert result["prompt"].change_log == "---> Pull Request #1:\n"
        assert result["prompt"].instruction_template == CHANGE_SUMMARY_INSTRUCTION
        assert result["prompt"].max_output_tokens == 300


class TestShouldBuildPrompt:
    """should_build_prompt 함수 테스트"""

    def test_continue_without_error(self, initial_state):
        assert should_build_prompt(initial_state) == "build_prompt"

    def test_end_on_error(self, initial_state):
        state = {**initial_state, "error_code": ErrorCode.GITHUB_API_ERROR}
        assert should_build_prompt(state) == "end"


class TestReportWorkflow:
    """create_report_workflow 통합 테스트"""

    @pytest.mark.asyncio
    async def test_success_builds_prompt(self, initial_state):
        """변경 로그 수집 후 프롬프트 생성"""
        with patch(
            "app.domain.changelog.workflow.build_change_log",
            new_callable=AsyncMock,
            return_value=("---> Pull Request #1:\n", 1),
        ):
            result = await create_report_workflow().ainvoke(initial_state)

        assert result["prompt"].text.endswith("---> Pull Request #1:\n")
        assert result.get("error_code") is None

    @pytest.mark.asyncio
    async def test_failure_skips_prompt(self, initial_state, create_http_error):
        """변경 로그 수집 실패 시 프롬프트를 만들지 않음"""
        with patch(
            "app.domain.changelog.workflow.build_change_log",
            new_callable=AsyncMock,
            side_effect=create_http_error(500),
        ):
            result = await create_report_workflow().ainvoke(initial_state)

        assert result["error_code"] == ErrorCode.GITHUB_API_ERROR
        assert "prompt" not in result
