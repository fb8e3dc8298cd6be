from app.dependencies import get_content_parser, get_posts_repo, get_posts_service
from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.posts_service import PostsService
from app.settings import settings


def test_get_posts_repo_uses_content_dir():
    repo = get_posts_repo()

    assert isinstance(repo, FilePostsRepo)
    assert repo.content_dir == settings.content_path


def test_get_content_parser_uses_content_dir():
    parser = get_content_parser()

    assert isinstance(parser, ContentParser)
    assert parser.content_dir == settings.content_path


def test_get_posts_service_constructs_service():
    class FakeRepo:
        pass

    class FakeParser:
        pass

    repo = FakeRepo()
    parser = FakeParser()
    svc = get_posts_service(repo=repo, parser=parser)

    assert isinstance(svc, PostsService)
    assert svc.repo is repo
    assert svc.parser is parser
