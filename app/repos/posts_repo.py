from pathlib import Path
from typing import Dict, List, Optional, Tuple

from app.errors import ContentRootMissingError
from app.settings import settings


class FilePostsRepo:
    """Discovers Markdown content files below the content directory."""

    def __init__(
        self,
        content_dir: Path,
        posts_prefix: str = settings.POSTS_PREFIX,
        pages_prefix: str = settings.PAGES_PREFIX,
    ):
        self.content_dir = Path(content_dir)
        self.posts_prefix = posts_prefix
        self.pages_prefix = pages_prefix

    def list_post_docs(self) -> List[dict]:
        return [doc for doc in self._all_docs() if doc["kind"] == "post"]

    def list_page_docs(self) -> List[dict]:
        return [doc for doc in self._all_docs() if doc["kind"] == "page"]

    def list_all_docs(self) -> List[dict]:
        return self._all_docs()

    def get_post_doc(self, slug: str) -> Optional[dict]:
        return self._get_doc(f"{self.posts_prefix}{slug}.md")

    def get_page_doc(self, slug: str) -> Optional[dict]:
        return self._get_doc(f"{self.pages_prefix}{slug}.md")

    def fingerprint(self) -> Dict[str, Tuple[int, int]]:
        return {doc["path"]: (doc["mtime_ns"], doc["size"]) for doc in self._all_docs()}

    def slug_for(self, path: str) -> str:
        for prefix in (self.posts_prefix, self.pages_prefix):
            if path.startswith(prefix):
                path = path.removeprefix(prefix)
                break
        return path.removesuffix(".md")

    def _get_doc(self, rel_path: str) -> Optional[dict]:
        path = self.content_dir / rel_path
        # refuse slugs with ".." or anything else that does not name the file directly
        try:
            resolved = path.resolve().relative_to(self.content_dir.resolve())
        except ValueError:
            return None
        if resolved.as_posix() != rel_path:
            return None
        if not self._is_valid(path, rel_path):
            return None
        return self._to_doc(path, rel_path)

    def _all_docs(self) -> List[dict]:
        if not self.content_dir.is_dir():
            raise ContentRootMissingError(str(self.content_dir))
        docs = []
        for path in sorted(self.content_dir.rglob("*.md")):
            rel_path = path.relative_to(self.content_dir).as_posix()
            if self._is_valid(path, rel_path):
                docs.append(self._to_doc(path, rel_path))
        return docs

    def _to_doc(self, path: Path, rel_path: str) -> dict:
        stat = path.stat()
        return {
            "_id": rel_path,
            "path": rel_path,
            "slug": self.slug_for(rel_path),
            "kind": "page" if rel_path.startswith(self.pages_prefix) else "post",
            "mtime_ns": stat.st_mtime_ns,
            "size": stat.st_size,
        }

    def _is_valid(self, path: Path, rel_path: str) -> bool:
        if not path.is_file() or not rel_path.endswith(".md"):
            return False
        if any(part.startswith(".") for part in rel_path.split("/")):
            return False
        return rel_path.startswith(self.posts_prefix) or rel_path.startswith(
            self.pages_prefix
        )
