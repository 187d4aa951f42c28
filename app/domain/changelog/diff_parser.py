from app.domain.changelog.schemas import DiffLine

ADDED_MARKER = "+"
REMOVED_MARKER = "-"
ADDED_HEADER = "+++"
REMOVED_HEADER = "---"


def parse_patch(patch: str) -> list[DiffLine]:
    """unified diff patch에서 추가/삭제 라인 추출.

    컨텍스트 라인, hunk 헤더, `+++`/`---` 파일 헤더, no-newline 표시는 무시한다.

    Args:
        patch: GitHub이 반환한 patch 텍스트

    Returns:
        patch 순서 그대로의 DiffLine 목록
    """
    lines = []
    for line in patch.split("\n"):
        if line.startswith(ADDED_MARKER) and not line.startswith(ADDED_HEADER):
            lines.append(DiffLine(kind="added", content=line[1:]))
        elif line.startswith(REMOVED_MARKER) and not line.startswith(REMOVED_HEADER):
            lines.append(DiffLine(kind="removed", content=line[1:]))
    return lines


def render_diff_line(line: DiffLine) -> str:
    """DiffLine을 `+ 내용` / `- 내용` 형식으로 변환"""
    marker = ADDED_MARKER if line.kind == "added" else REMOVED_MARKER
    return f"{marker} {line.content}"


def render_diff_lines(lines: list[DiffLine]) -> list[str]:
    return [render_diff_line(line) for line in lines]
