import logging
import threading
from typing import Callable, Optional

from app.db.base import SessionLocal
from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.publisher import publish_all
from app.settings import settings

logger = logging.getLogger(__name__)

STOP_WATCHER_EVENT = threading.Event()  # thread-safe shutdown signal


def watch_content(
    interval: float = settings.WATCH_INTERVAL_SECONDS,
    *,
    repo=None,
    parser=None,
    session_factory=SessionLocal,
    publish_fn: Callable = publish_all,
    stop_event: threading.Event = STOP_WATCHER_EVENT,
):
    logger.info("Content watcher thread started")
    repo = repo or FilePostsRepo(settings.content_path)
    parser = parser or ContentParser(settings.content_path)
    last_fingerprint: Optional[dict] = None
    backoff = 1

    while not stop_event.is_set():
        try:
            fingerprint = repo.fingerprint()
            if fingerprint != last_fingerprint:
                logger.info(f"Content changed ({len(fingerprint)} files), publishing...")
                with session_factory() as db_session:
                    publish_fn(db_session, repo, parser)
                last_fingerprint = fingerprint
            backoff = 1  # reset backoff after a clean cycle
            wait = interval
        except Exception as e:
            logger.error(f"Unexpected watcher error: {e}")
            logger.info(f"Retrying in {backoff} seconds...")
            wait = backoff
            backoff = min(backoff * 2, 60)  # cap backoff at 60s

        stop_event.wait(wait)

    logger.info("Content watcher stopped")


def start_watcher(interval: float = settings.WATCH_INTERVAL_SECONDS):
    """Start watcher in a daemon thread, or return None when disabled"""
    if interval <= 0:
        logger.info("Content watcher disabled")
        return None
    STOP_WATCHER_EVENT.clear()
    thread = threading.Thread(
        target=watch_content, args=(interval,), daemon=True, name="ContentWatcher"
    )
    thread.start()
    logger.info(f"Content watcher started, polling every {interval}s")
    return thread


def stop_watcher():
    """Signal watcher to stop"""
    STOP_WATCHER_EVENT.set()
    logger.info("Content watcher stopping...")
