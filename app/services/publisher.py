import hashlib
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.errors import PostParseError
from app.models.content_record import ContentRecord
from app.schemas.content import PublishResult
from app.services.front_matter import parse_post

logger = logging.getLogger(__name__)


def publish_all(db: Session, repo, parser, *, record_model=ContentRecord) -> PublishResult:
    """Copy every valid content file into the content table, keyed by slug.

    Rows whose checksum matches are left alone, rows whose source file is
    gone are deleted. A file that fails to parse is skipped and keeps its
    previously published row.
    """
    result = PublishResult()
    existing = {(row.kind, row.slug): row for row in db.query(record_model).all()}
    seen = set()

    for doc in repo.list_all_docs():
        key = (doc["kind"], doc["slug"])
        seen.add(key)
        markdown = parser.get_markdown_content(doc)
        if not markdown:
            logger.warning(f"No markdown content found for {doc['path']}")
            result.skipped += 1
            continue
        try:
            post = parse_post(markdown, path=doc["path"], slug=doc["slug"], kind=doc["kind"])
        except PostParseError as e:
            logger.warning(str(e))
            result.skipped += 1
            continue

        checksum = hashlib.sha256(markdown.encode("utf-8")).hexdigest()
        row = existing.get(key)
        if row is not None and row.checksum == checksum:
            result.unchanged += 1
            continue

        front = post.front_matter
        values = {
            "title": front.title,
            "date": front.date,
            "tags": list(front.tags),
            "summary": front.summary,
            "draft": front.draft,
            "body": post.body,
            "source_path": post.path,
            "checksum": checksum,
        }
        if row is None:
            db.add(record_model(kind=post.kind, slug=post.slug, **values))
            result.created += 1
        else:
            for name, value in values.items():
                setattr(row, name, value)
            result.updated += 1

    for key, row in existing.items():
        if key not in seen:
            db.delete(row)
            result.deleted += 1

    db.commit()
    logger.info(
        f"Published content: {result.created} created, {result.updated} updated, "
        f"{result.unchanged} unchanged, {result.deleted} deleted, {result.skipped} skipped"
    )
    return result


class ContentStoreRepo:
    """Read side of the content table, as a downstream consumer sees it."""

    def __init__(self, db: Session):
        self.db = db

    def list_published(self, kind: str = "post") -> List[ContentRecord]:
        return (
            self.db.query(ContentRecord)
            .filter(ContentRecord.kind == kind)
            .filter((ContentRecord.draft.is_(None)) | (ContentRecord.draft.is_(False)))
            .order_by(ContentRecord.date.desc(), ContentRecord.title)
            .all()
        )

    def get(self, slug: str, kind: str = "post") -> Optional[ContentRecord]:
        return self.db.get(ContentRecord, (kind, slug))
