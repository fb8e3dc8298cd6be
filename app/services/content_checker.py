import logging
from typing import Dict, Tuple

from app.errors import PostParseError
from app.schemas.content import ContentIssue, ContentReport
from app.services.code_blocks import extract_code_blocks
from app.services.front_matter import parse_post

logger = logging.getLogger(__name__)


def check_content(repo, parser) -> ContentReport:
    """Run the integrity checks over every post and page."""
    report = ContentReport()
    seen: Dict[Tuple[str, str], str] = {}

    for doc in repo.list_all_docs():
        report.checked += 1
        path = doc["path"]
        markdown = parser.get_markdown_content(doc)
        if not markdown.strip():
            report.issues.append(
                ContentIssue(path=path, code="unparseable", message="file is empty")
            )
            continue

        try:
            post = parse_post(markdown, path=path, slug=doc["slug"], kind=doc["kind"])
        except PostParseError as e:
            code = "unparseable" if e.reason.startswith("unreadable") else "invalid-front-matter"
            report.issues.append(ContentIssue(path=path, code=code, message=e.reason))
            continue

        report.issues.extend(check_code_blocks(path, post.body))

        if post.kind != "post":
            continue
        key = (post.front_matter.title.strip(), post.front_matter.date.isoformat())
        if key in seen:
            report.issues.append(
                ContentIssue(
                    path=path,
                    code="duplicate-post",
                    message=f"same title and date as {seen[key]}",
                )
            )
        else:
            seen[key] = path

    logger.info(f"Checked {report.checked} files, {len(report.issues)} issues")
    return report


def check_code_blocks(path: str, body: str) -> list[ContentIssue]:
    issues = []
    for block in extract_code_blocks(body):
        line = body.count("\n", 0, block.start) + 1
        if not block.closed:
            issues.append(
                ContentIssue(
                    path=path,
                    code="unclosed-code-fence",
                    message=f"{block.fence} fence is never closed",
                    line=line,
                )
            )
    return issues
