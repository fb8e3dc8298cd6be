from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class ContentIssue(BaseModel):
    path: str
    code: str
    message: str
    line: Optional[int] = None


class ContentReport(BaseModel):
    checked: int = 0
    issues: List[ContentIssue] = Field(default_factory=list)

    @computed_field
    @property
    def ok(self) -> bool:
        return not self.issues


class PublishResult(BaseModel):
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    skipped: int = 0
