from app.core.logging import get_logger
from app.domain.changelog.diff_parser import parse_patch, render_diff_lines
from app.domain.changelog.expander import expand_pull_request
from app.domain.changelog.schemas import (
    CommitChanges,
    FileDiffRecord,
    MergeWindow,
    PullRequestRecord,
)
from app.domain.changelog.selector import select_merged_pulls

logger = get_logger(__name__)


def format_pull_request_header(pull: PullRequestRecord) -> str:
    return f"---> Pull Request #{pull.number}:\n"


def format_file_changes(file: FileDiffRecord) -> str:
    """파일 헤더와 diff 라인을 변경 로그 형식으로 변환.

    patch가 없는 파일(바이너리 등)은 헤더만 남긴다.
    """
    lines = [
        f"--> File modified: {file.filename}:",
        f"-> Code modified in {file.filename}:",
    ]
    if file.patch is not None:
        lines.extend(render_diff_lines(parse_patch(file.patch)))
    return "".join(f"{line}\n" for line in lines)


def format_pull_request_changes(pull: PullRequestRecord, changes: list[CommitChanges]) -> str:
    """PR 하나의 변경 로그 생성, 커밋과 파일 순서 유지"""
    parts = [format_pull_request_header(pull)]
    for commit_changes in changes:
        for file in commit_changes.files:
            parts.append(format_file_changes(file))
    return "".join(parts)


async def build_change_log(
    owner: str,
    repo: str,
    window: MergeWindow,
    token: str | None = None,
) -> tuple[str, int]:
    """기간 내 merge된 PR의 변경 로그 조립.

    PR 선택, 커밋 확장, diff 파싱을 순서대로 수행하며 어느 단계든 실패하면
    예외를 그대로 전파한다.

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        window: merge 기간
        token: GitHub 토큰

    Returns:
        변경 로그 텍스트, 포함된 PR 수 튜플
    """
    pulls = await select_merged_pulls(owner, repo, window, token)

    parts = []
    for pull in pulls:
        changes = await expand_pull_request(pull, token)
        parts.append(format_pull_request_changes(pull, changes))

    change_log = "".join(parts)

    logger.info(
        "변경 로그 조립 완료 repo=%s/%s pulls=%d length=%d",
        owner,
        repo,
        len(pulls),
        len(change_log),
        change_log=change_log,
    )
    return change_log, len(pulls)
