import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app import dependencies as deps
from app.db.base import get_db
from app.schemas.content import ContentReport, PublishResult
from app.services.content_checker import check_content
from app.services.publisher import publish_all

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content")


@router.get("/check", response_model=ContentReport)
def check(
    repo=Depends(deps.get_posts_repo),
    parser=Depends(deps.get_content_parser),
):
    """Run the integrity checks over every content file."""
    try:
        return check_content(repo, parser)
    except Exception as e:
        logger.error(f"Content check failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to check content")


@router.post("/publish", response_model=PublishResult)
def publish(
    db: Session = Depends(get_db),
    repo=Depends(deps.get_posts_repo),
    parser=Depends(deps.get_content_parser),
):
    """Copy content files into the content table."""
    try:
        return publish_all(db, repo, parser)
    except Exception as e:
        logger.error(f"Failed to publish content: {e}")
        raise HTTPException(status_code=500, detail="Failed to publish content")
