from datetime import datetime, timezone

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # GitHub
    github_token: str = ""
    enterprise_hostname: str = ""
    github_timeout: float = 60.0
    github_per_page: int = Field(default=100, ge=1, le=100)

    # Webhook
    webhook_secret: str = ""
    webhook_rate_limit: str = "60/minute"
    # 종료 시 진행 중인 요약 task 대기 시간(초)
    shutdown_timeout: float = 10.0

    # LLM 프로바이더 선택: "openai", "vllm", "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM/RunPod 설정
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 120.0

    # 요약 출력 길이 제한, 샘플링 온도
    summary_max_tokens: int = 500
    summary_temperature: float = 0.3

    # 리포트 기간 (merge 시각 기준, 양 끝 포함)
    report_start_date: datetime = datetime(2023, 12, 30, tzinfo=timezone.utc)
    report_end_date: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)

    # 로깅 설정
    log_level: str = "INFO"
    # change_log, summary 등 긴 로그 필드 최대 길이, 0이면 자르지 않음
    log_field_max_length: int = 4000

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def github_api_base(self) -> str:
        """GitHub REST API 주소, Enterprise 호스트가 있으면 해당 주소 사용"""
        if self.enterprise_hostname:
            return f"https://{self.enterprise_hostname}/api/v3"
        return "https://api.github.com"

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if not self.github_token:
            errors.append("GITHUB_TOKEN")
        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if self.llm_provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        if self.llm_provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        return errors

    @field_validator("report_start_date", "report_end_date")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """timezone 없는 값은 UTC로 간주"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def validate_report_window(self):
        """리포트 기간 검증"""
        if self.report_start_date > self.report_end_date:
            raise ValueError("REPORT_START_DATE는 REPORT_END_DATE보다 늦을 수 없습니다")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """프로덕션 환경에서 필수 설정 검증"""
        if self.is_production:
            missing = self.validate_for_production()
            if missing:
                raise ValueError(f"프로덕션 환경에서 필수 설정 누락: {', '.join(missing)}")
        return self


settings = Settings()
