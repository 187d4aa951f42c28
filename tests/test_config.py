"""설정 테스트"""

from datetime import datetime, timezone

import pytest

from app.core.config import Settings


class TestReportWindow:
    """리포트 기간 설정 테스트"""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.report_start_date <= settings.report_end_date
        assert settings.summary_max_tokens > 0

    def test_naive_start_date_treated_as_utc(self, monkeypatch):
        """timezone 없는 시작일과 기본 종료일을 함께 써도 비교 가능"""
        monkeypatch.setenv("REPORT_START_DATE", "2023-12-30")

        settings = Settings(_env_file=None)

        assert settings.report_start_date == datetime(2023, 12, 30, tzinfo=timezone.utc)
        assert settings.report_end_date == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_naive_inverted_window_rejected(self):
        with pytest.raises(ValueError, match="REPORT_START_DATE"):
            Settings(
                _env_file=None,
                report_start_date=datetime(2024, 2, 1),
                report_end_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )

    def test_inverted_window_rejected(self):
        """시작이 끝보다 늦으면 설정 오류"""
        with pytest.raises(ValueError, match="REPORT_START_DATE"):
            Settings(
                _env_file=None,
                report_start_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
                report_end_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            )


class TestProductionValidation:
    """프로덕션 필수 설정 테스트"""

    def test_missing_settings_reported(self):
        settings = Settings(
            _env_file=None, github_token="", llm_provider="openai", openai_api_key=""
        )

        errors = settings.validate_for_production()

        assert "GITHUB_TOKEN" in errors
        assert "OPENAI_API_KEY" in errors

    @pytest.mark.parametrize(
        "provider, key",
        [("vllm", "VLLM_API_URL"), ("gemini", "GEMINI_API_KEY")],
    )
    def test_provider_specific_key(self, provider, key):
        settings = Settings(
            _env_file=None,
            github_token="ghp_test",
            llm_provider=provider,
            vllm_api_url="",
            gemini_api_key="",
        )

        assert settings.validate_for_production() == [key]

    def test_production_raises_on_missing(self):
        with pytest.raises(ValueError, match="프로덕션 환경에서 필수 설정 누락"):
            Settings(_env_file=None, environment="production", github_token="")
