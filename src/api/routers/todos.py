import logging
from datetime import datetime
from typing import Callable, Literal

from fastapi import APIRouter, Depends, HTTPException

from analysis.period import select_for_period
from analysis.todo_analyzer import TodoAnalyzer
from api.dependencies import get_clock, get_current_user_id, get_todo_analyzer, get_todo_store
from storage.todo_store import TodoStore
from todo_ai.listing import PriorityFilter, SortKey, StatusFilter, filter_todos, sort_todos
from todo_ai.models import TodoCreate, TodoUpdate

router = APIRouter(prefix="/todos")
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "할 일을 찾을 수 없어"


@router.get("")
async def list_todos(
    q: str = "",
    status: StatusFilter = "all",
    priority: PriorityFilter = "all",
    sort: SortKey = "created",
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    """List the user's todos with search, filters and sorting."""
    todos = await store.list(user_id)
    visible = sort_todos(filter_todos(todos, q=q, status=status, priority=priority), sort)
    return {
        "todos": [t.model_dump(mode="json") for t in visible],
        "total": len(todos),
        "completed": sum(1 for t in todos if t.completed),
        "active": sum(1 for t in todos if not t.completed),
    }


@router.post("", status_code=201)
async def create_todo(
    payload: TodoCreate,
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    todo = await store.insert(user_id, payload)
    logger.info(f"Created todo {todo.id} for user {user_id}")
    return todo.model_dump(mode="json")


@router.get("/analysis")
async def analyze_my_todos(
    period: Literal["today", "week"] = "today",
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
    analyzer: TodoAnalyzer = Depends(get_todo_analyzer),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> dict:
    """Analyze the stored todos that fall due in the selected period."""
    now = clock()
    snapshots = [t.to_snapshot() for t in await store.list(user_id)]
    selected = select_for_period(snapshots, period, now)
    result = await analyzer.analyze(selected, period, now=now)
    return result.model_dump()


@router.get("/{todo_id}")
async def get_todo(
    todo_id: str,
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    todo = await store.get(user_id, todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    return todo.model_dump(mode="json")


@router.patch("/{todo_id}")
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    todo = await store.update(user_id, todo_id, payload)
    if todo is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    return todo.model_dump(mode="json")


@router.delete("/{todo_id}")
async def delete_todo(
    todo_id: str,
    user_id: str = Depends(get_current_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    if not await store.delete(user_id, todo_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    logger.info(f"Deleted todo {todo_id} for user {user_id}")
    return {"status": "deleted"}
