from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from todo_ai.clock import KST
from todo_ai.models import AnalysisResult, Todo, TodoCreate, TodoDraft, TodoSnapshot, TodoUpdate


def test_draft_defaults():
    d = TodoDraft(title="회의", due_date="2026-10-15T09:00:00+09:00")
    assert d.priority == "medium"
    assert d.category == ["기타"]
    assert d.description is None


def test_draft_title_limit():
    with pytest.raises(ValidationError):
        TodoDraft(title="a" * 51, due_date="2026-10-15T09:00:00+09:00")


def test_snapshot_tolerates_loose_input():
    s = TodoSnapshot.model_validate({"title": 3, "completed": 1, "unknown": "x"})
    assert s.title == ""
    assert s.completed is True
    assert s.priority is None


def test_analysis_result_caps_urgent_tasks():
    with pytest.raises(ValidationError):
        AnalysisResult(summary="s", urgentTasks=[str(i) for i in range(6)])


def test_create_rejects_blank_title():
    with pytest.raises(ValidationError):
        TodoCreate(title="   ")


def test_create_moves_due_date_to_kst():
    c = TodoCreate(title="x", due_date=datetime(2026, 10, 14, 0, 0, tzinfo=timezone.utc))
    assert c.due_date.utcoffset() == KST.utcoffset(None)
    assert c.due_date.hour == 9


def test_update_allows_unset_title():
    u = TodoUpdate(completed=True)
    assert u.model_dump(exclude_unset=True) == {"completed": True}
    with pytest.raises(ValidationError):
        TodoUpdate(title="")


def test_todo_snapshot_conversion():
    t = Todo(
        id="1",
        user_id="u",
        title=" 보고서 ",
        created_date=datetime(2026, 10, 10, 9, 0, tzinfo=KST),
        updated_at=datetime(2026, 10, 10, 9, 0, tzinfo=KST),
        due_date=datetime(2026, 10, 15, 9, 0, tzinfo=KST),
        priority="high",
        category=["업무"],
    )
    s = t.to_snapshot()
    assert s.title == "보고서"
    assert s.due_date == "2026-10-15T09:00:00+09:00"
    assert s.category == ["업무"]


def test_snapshot_ignores_malformed_category():
    assert TodoSnapshot.model_validate({"title": "a", "category": "업무"}).category is None
    assert TodoSnapshot.model_validate({"title": "a", "category": ["업무", 3]}).category == ["업무"]


def test_create_rejects_out_of_range_due_date():
    with pytest.raises(ValidationError):
        TodoCreate(title="x", due_date="0001-01-01T00:00:00+10:00")
