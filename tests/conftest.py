import textwrap
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import init_db
from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    Docs are built from paths like "posts/hello.md".
    """

    def __init__(self, paths):
        self.docs = [_doc(path) for path in paths]

    def list_post_docs(self):
        return [doc for doc in self.docs if doc["kind"] == "post"]

    def list_page_docs(self):
        return [doc for doc in self.docs if doc["kind"] == "page"]

    def list_all_docs(self):
        return list(self.docs)

    def get_post_doc(self, slug):
        return self._find(f"posts/{slug}.md")

    def get_page_doc(self, slug):
        return self._find(f"pages/{slug}.md")

    def _find(self, path):
        return next((doc for doc in self.docs if doc["path"] == path), None)


def _doc(path: str) -> dict:
    kind = "page" if path.startswith("pages/") else "post"
    slug = path.split("/", 1)[-1].removesuffix(".md")
    return {"_id": path, "path": path, "slug": slug, "kind": kind}


class FakeParser:
    """
    Minimal markdown/content parser stand-in.
    """

    def __init__(self, content_by_path: dict[str, str]):
        self.content_by_path = content_by_path

    def get_markdown_content(self, doc: dict) -> str:
        raw = self.content_by_path.get(doc.get("path"))
        if raw is None:
            return ""
        return textwrap.dedent(raw).lstrip()


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        list_tags_return=None,
        get_page_return=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._list_tags_return = list_tags_return or []
        self._get_page_return = get_page_return
        self.calls = []

    def list_posts(self, tag=None, include_drafts=False):
        self.calls.append(("list_posts", tag, include_drafts))
        return self._list_posts_return

    def get_post(self, slug: str, include_drafts=False):
        self.calls.append(("get_post", slug, include_drafts))
        return self._get_post_return

    def list_tags(self):
        return self._list_tags_return

    def get_page(self, slug: str):
        return self._get_page_return


def write_content(root: Path, files: dict[str, str]) -> Path:
    for rel_path, text in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return root


@pytest.fixture
def content_dir(tmp_path):
    return write_content(
        tmp_path / "content",
        {
            "posts/cosmos.md": """
            ---
            title: Cosmos partitions
            date: 2023-02-14
            tags: [Azure, CosmosDB]
            summary: Picking a key
            ---
            Body about partitions.
            """,
            "posts/2024/timeprovider.md": """
            ---
            title: TimeProvider
            date: 2024-01-15
            tags: [.NET]
            ---
            Clock body.
            """,
            "posts/draft.md": """
            ---
            title: Unfinished
            date: 2024-03-01
            draft: true
            ---
            Not yet.
            """,
            "pages/about.md": """
            ---
            title: About
            date: 2023-01-01
            ---
            Hello.
            """,
        },
    )


@pytest.fixture
def file_repo(content_dir):
    return FilePostsRepo(content_dir)


@pytest.fixture
def file_parser(content_dir):
    return ContentParser(content_dir)


@pytest.fixture
def db_session():
    # one shared connection so TestClient worker threads see the same in-memory db
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
