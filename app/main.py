import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from app.db.base import init_db
from app.routers import content, posts
from app.security import get_api_key
from app.services.content_watcher import start_watcher, stop_watcher
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog Content API", description="Markdown posts and pages")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    watcher_thread = start_watcher(settings.WATCH_INTERVAL_SECONDS)

    try:
        yield
    finally:
        if watcher_thread is not None:
            stop_watcher()
            watcher_thread.join(timeout=10)
            logger.info("Content watcher exited gracefully")


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(content.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Blog Content API is running"}
