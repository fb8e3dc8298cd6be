import logging

from app.db.base import SessionLocal, init_db
from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.publisher import publish_all
from app.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        content_dir = settings.content_path
        publish_all(session, FilePostsRepo(content_dir), ContentParser(content_dir))
        logger.info("Publish completed successfully.")
    except Exception as e:
        logger.error(f"Publish failed: {e}", exc_info=True)
    finally:
        session.close()
