import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.changelog.schemas import CommitRecord, FileDiffRecord, PullRequestRecord

logger = get_logger(__name__)

MAX_PER_PAGE = 100

_client = httpx.AsyncClient(timeout=settings.github_timeout)


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰, 없으면 설정값 사용

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {"Accept": "application/vnd.github.v3+json"}
    token = token or settings.github_token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


async def list_closed_pulls(
    owner: str,
    repo: str,
    token: str | None = None,
    page: int = 1,
    per_page: int = MAX_PER_PAGE,
) -> list[PullRequestRecord]:
    """닫힌 PR 목록 한 페이지 조회, 수정 시각 내림차순

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        token: GitHub 토큰
        page: 페이지 번호, 1부터 시작
        per_page: 페이지당 PR 개수

    Returns:
        API가 반환한 순서 그대로의 PR 목록

    Raises:
        httpx.HTTPStatusError: GitHub API 호출 실패 시
    """
    url = f"{settings.github_api_base}/repos/{owner}/{repo}/pulls"
    params = {
        "state": "closed",
        "sort": "updated",
        "direction": "desc",
        "per_page": min(per_page, MAX_PER_PAGE),
        "page": page,
    }

    response = await _client.get(url, headers=_get_headers(token), params=params)
    response.raise_for_status()
    data = response.json()

    pulls = [
        PullRequestRecord(
            number=pr["number"],
            merged_at=pr.get("merged_at"),
            updated_at=pr.get("updated_at"),
            repository_owner=owner,
            repository_name=repo,
        )
        for pr in data
    ]

    logger.info("닫힌 PR 조회 완료 repo=%s/%s page=%d count=%d", owner, repo, page, len(pulls))
    return pulls


async def list_pull_commits(
    pull: PullRequestRecord,
    token: str | None = None,
    page: int = 1,
    per_page: int = MAX_PER_PAGE,
) -> list[CommitRecord]:
    """PR에 포함된 커밋 목록 한 페이지 조회

    Args:
        pull: 대상 PR
        token: GitHub 토큰
        page: 페이지 번호, 1부터 시작
        per_page: 페이지당 커밋 개수

    Returns:
        API가 반환한 순서 그대로의 커밋 목록
    """
    owner, repo = pull.repository_owner, pull.repository_name
    url = f"{settings.github_api_base}/repos/{owner}/{repo}/pulls/{pull.number}/commits"
    params = {"per_page": min(per_page, MAX_PER_PAGE), "page": page}

    response = await _client.get(url, headers=_get_headers(token), params=params)
    response.raise_for_status()
    data = response.json()

    commits = [CommitRecord(sha=commit["sha"], pull_request=pull) for commit in data]

    logger.info(
        "PR 커밋 조회 완료 repo=%s/%s pr=%d page=%d count=%d",
        owner,
        repo,
        pull.number,
        page,
        len(commits),
    )
    return commits


async def get_commit_files(
    owner: str, repo: str, sha: str, token: str | None = None
) -> list[FileDiffRecord]:
    """커밋 상세 조회 후 변경 파일과 patch 반환

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        sha: 커밋 SHA
        token: GitHub 토큰

    Returns:
        API가 반환한 순서 그대로의 변경 파일 목록
    """
    url = f"{settings.github_api_base}/repos/{owner}/{repo}/commits/{sha}"

    response = await _client.get(url, headers=_get_headers(token))
    response.raise_for_status()
    data = response.json()

    files = [
        FileDiffRecord(filename=f["filename"], patch=f.get("patch"))
        for f in data.get("files", [])
    ]

    logger.info("커밋 상세 조회 완료 repo=%s/%s sha=%s files=%d", owner, repo, sha[:7], len(files))
    return files
