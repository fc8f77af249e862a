from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, List, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todo_ai.clock import to_kst


Priority = Literal["high", "medium", "low"]
Period = Literal["today", "week"]

PRIORITIES = ("high", "medium", "low")
PERIODS = ("today", "week")

DEFAULT_PRIORITY: Priority = "medium"
DEFAULT_CATEGORY = "기타"
PLACEHOLDER_TITLE = "새 할 일"


def _due_in_kst(v: Optional[datetime]) -> Optional[datetime]:
    if v is None:
        return v
    try:
        return to_kst(v)
    except OverflowError:
        raise ValueError("due_date out of range")


class TodoDraft(BaseModel):
    """Structured task produced by the extraction pipeline."""

    title: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    due_date: str
    priority: Priority = DEFAULT_PRIORITY
    category: List[str] = Field(default_factory=lambda: [DEFAULT_CATEGORY], min_length=1)


class TodoSnapshot(BaseModel):
    """A task as sent in for analysis. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    completed: bool = False
    priority: Optional[str] = None
    category: Optional[List[str]] = None
    due_date: Optional[str] = None
    created_date: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_or_blank(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("completed", mode="before")
    @classmethod
    def completed_truthy(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("category", mode="before")
    @classmethod
    def category_list_or_none(cls, v: Any) -> Optional[List[str]]:
        if not isinstance(v, list):
            return None
        return [c for c in v if isinstance(c, str)]


class AnalysisResult(BaseModel):
    summary: str
    urgentTasks: List[str] = Field(default_factory=list, max_length=5)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class GenerateTodoIn(BaseModel):
    input: Optional[Any] = None


class AnalyzeTodosIn(BaseModel):
    todos: Optional[Any] = None
    period: Optional[Any] = None


class Todo(BaseModel):
    """A stored todo row, scoped to its owner."""

    id: str
    user_id: str
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    created_date: datetime
    updated_at: datetime
    due_date: Optional[datetime] = None
    priority: Priority = DEFAULT_PRIORITY
    category: List[str] = Field(default_factory=list)
    completed: bool = False
    completed_at: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("due_date")
    @classmethod
    def due_date_in_kst(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _due_in_kst(v)

    def to_snapshot(self) -> TodoSnapshot:
        return TodoSnapshot(
            title=self.title,
            completed=self.completed,
            priority=self.priority,
            category=list(self.category),
            due_date=self.due_date.isoformat() if self.due_date else None,
            created_date=self.created_date.isoformat(),
        )


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Priority = DEFAULT_PRIORITY
    category: List[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("due_date")
    @classmethod
    def due_date_in_kst(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _due_in_kst(v)


class TodoUpdate(BaseModel):
    """Partial update; fields left unset are not touched."""

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    category: Optional[List[str]] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("due_date")
    @classmethod
    def due_date_in_kst(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _due_in_kst(v)
