import logging
import math
from collections import Counter
from typing import List, Optional

from app.errors import PostParseError
from app.schemas.blog import (
    CodeBlockInfo,
    PageDetail,
    Post,
    PostDetail,
    PostSummary,
    TagCount,
)
from app.services.code_blocks import extract_code_blocks
from app.services.front_matter import parse_post
from app.settings import settings

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, parser):
        self.repo = repo
        self.parser = parser

    def list_posts(
        self, tag: Optional[str] = None, include_drafts: bool = False
    ) -> List[PostSummary]:
        posts = self._load_posts(include_drafts)
        if tag:
            wanted = tag.casefold()
            posts = [
                p for p in posts if any(t.casefold() == wanted for t in p.front_matter.tags)
            ]
        return [_to_summary(p) for p in posts]

    def get_post(self, slug: str, include_drafts: bool = False) -> Optional[PostDetail]:
        doc = self.repo.get_post_doc(slug)
        if not doc:
            return None
        post = load_post(doc, self.parser)
        if not post:
            return None
        if not post.is_published and not include_drafts:
            logger.debug(f"Hiding draft post {slug}")
            return None
        return PostDetail(
            **_to_summary(post).model_dump(),
            content=post.body,
            codeBlocks=[
                CodeBlockInfo(
                    language=block.language,
                    highlight=list(block.highlight),
                    closed=block.closed,
                )
                for block in extract_code_blocks(post.body)
            ],
        )

    def list_tags(self) -> List[TagCount]:
        """Count published posts per tag, ignoring case.

        Each tag is labelled with the spelling used by the newest post that
        carries it.
        """
        counts = Counter()
        labels = {}
        for post in self._load_posts(include_drafts=False):
            keys = set()
            for tag in post.front_matter.tags:
                key = tag.casefold()
                labels.setdefault(key, tag)
                keys.add(key)
            # a tag repeated inside one post counts once
            counts.update(keys)
        return [
            TagCount(tag=labels[key], count=count)
            for key, count in sorted(
                counts.items(), key=lambda item: (-item[1], labels[item[0]])
            )
        ]

    def get_page(self, slug: str) -> Optional[PageDetail]:
        doc = self.repo.get_page_doc(slug)
        if not doc:
            return None
        page = load_post(doc, self.parser)
        if not page or not page.is_published:
            return None
        front = page.front_matter
        return PageDetail(
            slug=page.slug,
            title=front.title,
            date=front.date.isoformat(),
            summary=front.summary,
            content=page.body,
        )

    def _load_posts(self, include_drafts: bool) -> List[Post]:
        posts = []
        for doc in self.repo.list_post_docs():
            post = load_post(doc, self.parser)
            if post and (include_drafts or post.is_published):
                posts.append(post)

        posts.sort(key=lambda p: p.front_matter.title)
        posts.sort(key=lambda p: p.front_matter.date, reverse=True)
        return posts


def load_post(doc: dict, parser) -> Optional[Post]:
    """Read and parse a content doc, or None if it is missing or invalid."""
    path = doc.get("path", doc.get("_id", ""))
    markdown = parser.get_markdown_content(doc)
    if not markdown:
        logger.warning(f"No markdown content found for {path}")
        return None
    try:
        return parse_post(
            markdown,
            path=path,
            slug=doc.get("slug") or _slug_from_path(path),
            kind=doc.get("kind", "post"),
        )
    except PostParseError as e:
        logger.warning(str(e))
        return None


def _slug_from_path(path: str) -> str:
    return path.split("/", 1)[-1].removesuffix(".md")


def _to_summary(post: Post) -> PostSummary:
    front = post.front_matter
    return PostSummary(
        slug=post.slug,
        title=front.title,
        date=front.date.isoformat(),
        summary=front.summary,
        tags=front.tags,
        readingTime=calculate_reading_time(post.body),
        draft=not post.is_published,
    )


def calculate_reading_time(text: str, words_per_minute: int | None = None) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / (words_per_minute or settings.WORDS_PER_MINUTE)) or 1
    return f"{minutes} min"
