import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class FrontMatter(BaseModel):
    """Metadata block at the top of every post and page."""

    model_config = ConfigDict(extra="allow")

    title: str
    date: datetime.date
    tags: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    draft: Optional[StrictBool] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        # YAML gives us date/datetime for bare values and str for quoted ones
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if isinstance(value, str):
            return datetime.date.fromisoformat(value.strip())
        raise ValueError(f"expected a YYYY-MM-DD date, got {type(value).__name__}")

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class Post(BaseModel):
    """A parsed content file. The relative path is its identity."""

    path: str
    slug: str
    kind: Literal["post", "page"] = "post"
    front_matter: FrontMatter
    body: str = ""

    @property
    def is_published(self) -> bool:
        return self.front_matter.draft is not True


class CodeBlockInfo(BaseModel):
    language: Optional[str] = None
    highlight: List[int] = Field(default_factory=list)
    closed: bool = True


class PostSummary(BaseModel):
    slug: str
    title: str
    date: str
    summary: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    draft: bool = False


class PostDetail(PostSummary):
    content: str
    codeBlocks: List[CodeBlockInfo] = Field(default_factory=list)


class PageDetail(BaseModel):
    slug: str
    title: str
    date: str
    summary: Optional[str] = None
    content: str


class TagCount(BaseModel):
    tag: str
    count: int
