from fastapi import Depends

from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.posts_service import PostsService
from app.settings import settings


def get_posts_repo():
    return FilePostsRepo(settings.content_path)


def get_content_parser():
    return ContentParser(settings.content_path)


def get_posts_service(
    repo=Depends(get_posts_repo),
    parser=Depends(get_content_parser),
):
    return PostsService(repo=repo, parser=parser)
