from app.core.config import settings
from app.core.logging import get_logger
from app.domain.changelog.schemas import MergeWindow, PullRequestRecord
from app.infra.github.client import list_closed_pulls

logger = get_logger(__name__)


def is_in_window(pull: PullRequestRecord, window: MergeWindow) -> bool:
    """merge 시각이 기간 안에 있는지 판단, 양 끝 포함"""
    if pull.merged_at is None:
        return False
    return window.start <= pull.merged_at <= window.end


def _page_precedes_window(page: list[PullRequestRecord], window: MergeWindow) -> bool:
    """페이지의 가장 오래된 수정 시각이 기간 시작보다 이전인지 판단.

    수정 시각 내림차순이므로 이후 페이지의 PR은 모두 기간 이전에 마지막으로 수정된 것이다.
    """
    oldest = page[-1].updated_at
    return oldest is not None and oldest < window.start


async def select_merged_pulls(
    owner: str,
    repo: str,
    window: MergeWindow,
    token: str | None = None,
) -> list[PullRequestRecord]:
    """기간 안에 merge된 PR 목록 조회.

    닫힌 PR을 수정 시각 내림차순으로 페이지 단위 조회하며, 빈 페이지나 짧은 페이지,
    또는 기간 시작 이전까지 내려간 페이지에서 멈춘다.

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        window: merge 기간
        token: GitHub 토큰

    Returns:
        API 순서를 유지한 기간 내 merge PR 목록

    Raises:
        httpx.HTTPError: GitHub API 호출 실패 시
    """
    per_page = settings.github_per_page
    selected = []
    page_number = 1

    while True:
        page = await list_closed_pulls(owner, repo, token, page=page_number, per_page=per_page)
        if not page:
            break

        selected.extend(pull for pull in page if is_in_window(pull, window))

        if len(page) < per_page or _page_precedes_window(page, window):
            break
        page_number += 1

    logger.info(
        "기간 내 merge PR 선택 완료 repo=%s/%s pages=%d selected=%d",
        owner,
        repo,
        page_number,
        len(selected),
    )
    return selected
