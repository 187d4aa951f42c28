"""app/main.py 테스트"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app, lifespan


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_returns_up(self):
        """헬스체크 엔드포인트가 정상 응답을 반환"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}


class TestAppConfiguration:
    """앱 설정 테스트"""

    def test_app_has_correct_title(self):
        """앱 제목이 올바르게 설정됨"""
        assert app.title == "Merge Digest"

    def test_app_has_correct_version(self):
        """앱 버전이 올바르게 설정됨"""
        assert app.version == "1.0.0"

    @pytest.mark.asyncio
    async def test_webhook_route_is_mounted(self):
        """webhook 라우트가 /api/v1 아래에 연결됨"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/v1/webhooks/github",
                json={"zen": "hi"},
                headers={"X-GitHub-Event": "ping", "X-GitHub-Delivery": "delivery-1"},
            )

        assert response.status_code == 200
        assert response.json()["status"] == "ignored"


class TestLifespan:
    """앱 시작/종료 테스트"""

    @pytest.mark.asyncio
    async def test_shutdown_drains_tasks_and_closes_client(self):
        """종료 시 이벤트 task, 요약 task 순서로 정리 후 GitHub 클라이언트 종료"""
        order = []
        with (
            patch(
                "app.main.drain_event_tasks",
                new_callable=AsyncMock,
                side_effect=lambda timeout: order.append("events"),
            ) as mock_drain_events,
            patch(
                "app.main.drain_summary_tasks",
                new_callable=AsyncMock,
                side_effect=lambda timeout: order.append("summaries"),
            ) as mock_drain,
            patch("app.main.close_github_client", new_callable=AsyncMock) as mock_close,
            patch("app.main.settings") as mock_settings,
        ):
            mock_settings.is_production = False
            mock_settings.shutdown_timeout = 5.0
            async with lifespan(app):
                mock_drain_events.assert_not_awaited()
                mock_drain.assert_not_awaited()

        mock_drain_events.assert_awaited_once_with(5.0)
        mock_drain.assert_awaited_once_with(5.0)
        assert order == ["events", "summaries"]
        mock_close.assert_awaited_once()
