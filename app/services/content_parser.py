import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ContentParser:
    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def get_markdown_content(self, doc: dict) -> str:
        """Get the full markdown content of a document (decoded as text)."""
        raw = self._get_raw_content(doc)
        if isinstance(raw, bytes):
            # Drop a leading BOM and any stray bytes that are not utf-8
            return raw.decode("utf-8-sig", errors="ignore")
        return raw or ""

    def _get_raw_content(self, doc: dict) -> bytes | None:
        path = self.content_dir / doc["path"]
        try:
            return path.read_bytes()
        except FileNotFoundError:
            logger.warning(f"Content file disappeared: {doc['path']}")
            return None
