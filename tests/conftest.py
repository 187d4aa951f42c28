"""테스트 공통 fixture"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.domain.changelog.schemas import (
    CommitChanges,
    CommitRecord,
    FileDiffRecord,
    MergeWindow,
    PullRequestEvent,
    PullRequestRecord,
)
from app.main import app


@pytest.fixture
def sample_window() -> MergeWindow:
    """테스트용 merge 기간"""
    return MergeWindow(
        start=datetime(2023, 12, 30, tzinfo=timezone.utc),
        end=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_pull():
    """PullRequestRecord 생성 helper"""

    def _make(
        number: int,
        merged_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> PullRequestRecord:
        return PullRequestRecord(
            number=number,
            merged_at=merged_at,
            updated_at=updated_at or merged_at,
            repository_owner="octo",
            repository_name="repo",
        )

    return _make


@pytest.fixture
def sample_pull(make_pull) -> PullRequestRecord:
    """테스트용 기간 내 PR"""
    return make_pull(42, merged_at=datetime(2023, 12, 31, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_changes(sample_pull) -> list[CommitChanges]:
    """테스트용 커밋 변경 목록"""
    return [
        CommitChanges(
            commit=CommitRecord(sha="abc1234", pull_request=sample_pull),
            files=[
                FileDiffRecord(
                    filename="app.js",
                    patch="@@ -1,1 +1,2 @@\n-old\n+new1\n+new2",
                )
            ],
        )
    ]


@pytest.fixture
def sample_event() -> PullRequestEvent:
    """테스트용 PR opened 이벤트"""
    return PullRequestEvent(
        action="opened",
        repository_owner="octo",
        repository_name="repo",
        pull_number=7,
        delivery_id="delivery-123",
    )


@pytest.fixture
def pull_request_payload() -> dict:
    """테스트용 pull_request webhook 페이로드"""
    return {
        "action": "opened",
        "number": 7,
        "pull_request": {"number": 7, "title": "Add feature"},
        "repository": {"name": "repo", "owner": {"login": "octo"}},
    }


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def mock_summarizer_client():
    """변경 요약용 LLM 클라이언트 mock"""
    with patch("app.infra.llm.client.get_summarizer_client") as mock_get:
        mock_client = MagicMock()
        mock_client.get_model_name.return_value = "test-model"
        mock_get.return_value = mock_client
        yield mock_client


@pytest.fixture
def mock_github_response():
    """GitHub API 응답 mock 생성"""
    mock = MagicMock()
    mock.raise_for_status = MagicMock()
    return mock


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        request = httpx.Request("GET", "https://test.com")
        return httpx.HTTPStatusError(
            message,
            request=request,
            response=httpx.Response(status_code, request=request),
        )

    return _create
