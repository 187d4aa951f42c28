from app.api.v1.schemas.webhook import PullRequestWebhookPayload, WebhookResponse

__all__ = [
    "PullRequestWebhookPayload",
    "WebhookResponse",
]
