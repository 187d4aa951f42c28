"""GitHub webhook API 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class OwnerPayload(BaseModel):
    login: str = Field(min_length=1)


class RepositoryPayload(BaseModel):
    name: str = Field(min_length=1)
    owner: OwnerPayload


class PullRequestPayload(BaseModel):
    number: int


class PullRequestWebhookPayload(BaseModel):
    """pull_request 이벤트 페이로드 중 사용하는 필드."""

    action: str
    repository: RepositoryPayload
    pull_request: PullRequestPayload | None = None


class WebhookResponse(BaseModel):
    """Webhook 처리 응답."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: str
    delivery_id: str | None = Field(default=None, alias="deliveryId")
