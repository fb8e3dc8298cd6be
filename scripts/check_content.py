import logging
import sys

from app.errors import ContentRootMissingError
from app.repos.posts_repo import FilePostsRepo
from app.services.content_checker import check_content
from app.services.content_parser import ContentParser
from app.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    content_dir = settings.content_path
    try:
        report = check_content(FilePostsRepo(content_dir), ContentParser(content_dir))
    except ContentRootMissingError as e:
        logger.error(str(e))
        return 2
    for issue in report.issues:
        where = f"{issue.path}:{issue.line}" if issue.line else issue.path
        logger.error(f"{where} [{issue.code}] {issue.message}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
