import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Security
from starlette.status import HTTP_403_FORBIDDEN

from app import dependencies as deps
from app.schemas.blog import PageDetail, PostDetail, PostSummary, TagCount
from app.security import api_key_header, get_settings, is_valid_api_key
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_key_for_drafts(
    include_drafts: bool = False,
    api_key: Optional[str] = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
) -> bool:
    if include_drafts and not is_valid_api_key(api_key, current_settings):
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN, detail="Drafts require an API key"
        )
    return include_drafts


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    tag: Optional[str] = None,
    include_drafts: bool = Depends(_require_key_for_drafts),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get published posts metadata, newest first."""
    try:
        return service.list_posts(tag=tag, include_drafts=include_drafts)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostDetail)
def get_post(
    slug: str,
    include_drafts: bool = Depends(_require_key_for_drafts),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        post = service.get_post(slug, include_drafts=include_drafts)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/tags", response_model=List[TagCount])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/pages/{slug}", response_model=PageDetail)
def get_page(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Get a standalone page such as About."""
    try:
        page = service.get_page(slug)
        if not page:
            raise HTTPException(status_code=404, detail="Page not found")
        return page
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving page {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve page")
