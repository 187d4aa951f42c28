from app.core.config import settings
from app.core.logging import get_logger
from app.domain.changelog.schemas import CommitChanges, CommitRecord, PullRequestRecord
from app.infra.github.client import get_commit_files, list_pull_commits

logger = get_logger(__name__)


async def _list_all_commits(pull: PullRequestRecord, token: str | None) -> list[CommitRecord]:
    """PR 커밋 전체 조회, 짧은 페이지가 나올 때까지"""
    per_page = settings.github_per_page
    commits = []
    page_number = 1

    while True:
        page = await list_pull_commits(pull, token, page=page_number, per_page=per_page)
        commits.extend(page)
        if len(page) < per_page:
            break
        page_number += 1

    return commits


async def expand_pull_request(
    pull: PullRequestRecord, token: str | None = None
) -> list[CommitChanges]:
    """PR의 커밋별 변경 파일 조회.

    커밋 상세는 순서대로 하나씩 조회하며, 하나라도 실패하면 예외를 그대로 전파한다.

    Args:
        pull: 대상 PR
        token: GitHub 토큰

    Returns:
        커밋 순서를 유지한 (커밋, 변경 파일) 목록
    """
    commits = await _list_all_commits(pull, token)

    expanded = []
    for commit in commits:
        files = await get_commit_files(
            pull.repository_owner, pull.repository_name, commit.sha, token
        )
        expanded.append(CommitChanges(commit=commit, files=files))

    logger.info("PR 커밋 확장 완료 pr=%d commits=%d", pull.number, len(expanded))
    return expanded
