"""Exceptions raised while reading content files."""


class ContentError(Exception):
    """Base class for content errors."""


class PostParseError(ContentError):
    """Raised when a content file's front matter cannot be parsed or validated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse content at '{path}': {reason}")


class ContentRootMissingError(ContentError):
    """Raised when the content directory does not exist."""

    def __init__(self, content_dir: str) -> None:
        self.content_dir = content_dir
        super().__init__(f"Content directory '{content_dir}' does not exist")
