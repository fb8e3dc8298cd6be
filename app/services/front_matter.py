import logging

import frontmatter
import yaml
from pydantic import ValidationError

from app.errors import PostParseError
from app.schemas.blog import FrontMatter, Post

logger = logging.getLogger(__name__)


_YAML = frontmatter.YAMLHandler()


def parse_post(text: str, path: str, slug: str, kind: str = "post") -> Post:
    """Split front matter from the Markdown body and validate it.

    Raises PostParseError when the YAML is unreadable, is not a mapping, or
    does not satisfy the front-matter schema.
    """
    text = text.strip()
    if not _YAML.detect(text):
        raise PostParseError(path, "missing front matter")

    try:
        raw, content = _YAML.split(text)
    except ValueError as e:
        raise PostParseError(path, "unreadable front matter: no closing delimiter") from e

    try:
        metadata = _YAML.load(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise PostParseError(path, f"unreadable front matter: {e}") from e

    if metadata is None or metadata == {}:
        raise PostParseError(path, "missing front matter")
    if not isinstance(metadata, dict):
        raise PostParseError(
            path, f"front matter is not a mapping ({type(metadata).__name__})"
        )

    try:
        front = FrontMatter.model_validate(metadata)
    except ValidationError as e:
        raise PostParseError(path, _describe(e)) from e

    return Post(path=path, slug=slug, kind=kind, front_matter=front, body=content.strip())


def dump_post(post: Post) -> str:
    """Serialize a post back to front matter + Markdown, keeping tag order."""
    metadata = post.front_matter.model_dump(exclude_unset=True)
    return frontmatter.dumps(frontmatter.Post(post.body, **metadata), sort_keys=False)


def is_published(post: Post) -> bool:
    return post.is_published


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "front matter"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)
