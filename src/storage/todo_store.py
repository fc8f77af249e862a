"""
Row store for todos.

Every operation is scoped by the owner's user id. Listing is ordered by
created_date, newest first.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from storage import db
from todo_ai.models import Todo, TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = ("title", "description", "due_date", "priority", "category", "completed")
_NULLABLE_COLUMNS = ("description", "due_date")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _patch_changes(patch: TodoUpdate) -> dict:
    changes = patch.model_dump(exclude_unset=True)
    return {k: v for k, v in changes.items() if v is not None or k in _NULLABLE_COLUMNS}


def _completion_changes(changes: dict, now: datetime) -> dict:
    if "completed" in changes and changes["completed"] is not None:
        changes["completed_at"] = now if changes["completed"] else None
    return changes


class TodoStore(ABC):
    @abstractmethod
    async def insert(self, user_id: str, todo: TodoCreate) -> Todo: ...

    @abstractmethod
    async def list(self, user_id: str) -> List[Todo]: ...

    @abstractmethod
    async def get(self, user_id: str, todo_id: str) -> Optional[Todo]: ...

    @abstractmethod
    async def update(self, user_id: str, todo_id: str, patch: TodoUpdate) -> Optional[Todo]: ...

    @abstractmethod
    async def delete(self, user_id: str, todo_id: str) -> bool: ...

    async def health(self) -> dict:
        return {"status": "healthy"}


class InMemoryTodoStore(TodoStore):
    """Process-local store; data is lost on restart."""

    def __init__(self):
        self._rows: Dict[str, Dict[str, Todo]] = {}

    async def insert(self, user_id: str, todo: TodoCreate) -> Todo:
        now = _utcnow()
        row = Todo(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_date=now,
            updated_at=now,
            **todo.model_dump(),
        )
        self._rows.setdefault(user_id, {})[row.id] = row
        return row

    async def list(self, user_id: str) -> List[Todo]:
        # insertion order doubles as a tiebreak for equal timestamps
        rows = list(reversed(self._rows.get(user_id, {}).values()))
        return sorted(rows, key=lambda t: t.created_date, reverse=True)

    async def get(self, user_id: str, todo_id: str) -> Optional[Todo]:
        return self._rows.get(user_id, {}).get(todo_id)

    async def update(self, user_id: str, todo_id: str, patch: TodoUpdate) -> Optional[Todo]:
        current = await self.get(user_id, todo_id)
        if current is None:
            return None
        now = _utcnow()
        changes = _completion_changes(_patch_changes(patch), now)
        changes["updated_at"] = now
        updated = current.model_copy(update=changes)
        self._rows[user_id][todo_id] = updated
        return updated

    async def delete(self, user_id: str, todo_id: str) -> bool:
        return self._rows.get(user_id, {}).pop(todo_id, None) is not None


class PostgresTodoStore(TodoStore):
    """asyncpg-backed store. Requires db.init_db_pool() to have run."""

    @staticmethod
    def _from_record(record) -> Todo:
        return Todo(
            id=str(record["id"]),
            user_id=record["user_id"],
            title=record["title"],
            description=record["description"],
            created_date=record["created_date"],
            updated_at=record["updated_at"],
            due_date=record["due_date"],
            priority=record["priority"],
            category=list(record["category"] or []),
            completed=record["completed"],
            completed_at=record["completed_at"],
        )

    @staticmethod
    def _uuid(todo_id: str) -> Optional[uuid.UUID]:
        try:
            return uuid.UUID(todo_id)
        except ValueError:
            return None

    async def insert(self, user_id: str, todo: TodoCreate) -> Todo:
        query = """
            INSERT INTO todos (user_id, title, description, due_date, priority, category)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
        """
        record = await db.fetchrow(
            query,
            user_id,
            todo.title,
            todo.description,
            todo.due_date,
            todo.priority,
            todo.category,
        )
        logger.info(f"Inserted todo {record['id']} for user {user_id}")
        return self._from_record(record)

    async def list(self, user_id: str) -> List[Todo]:
        records = await db.fetch(
            "SELECT * FROM todos WHERE user_id = $1 ORDER BY created_date DESC",
            user_id,
        )
        return [self._from_record(r) for r in records]

    async def get(self, user_id: str, todo_id: str) -> Optional[Todo]:
        key = self._uuid(todo_id)
        if key is None:
            return None
        record = await db.fetchrow(
            "SELECT * FROM todos WHERE id = $1 AND user_id = $2",
            key,
            user_id,
        )
        return self._from_record(record) if record else None

    async def update(self, user_id: str, todo_id: str, patch: TodoUpdate) -> Optional[Todo]:
        key = self._uuid(todo_id)
        if key is None:
            return None

        changes = {k: v for k, v in _patch_changes(patch).items() if k in _UPDATABLE_COLUMNS}
        changes = _completion_changes(changes, _utcnow())
        if not changes:
            return await self.get(user_id, todo_id)

        columns = list(changes.keys())
        assignments = ", ".join(f"{col} = ${i}" for i, col in enumerate(columns, start=3))
        query = f"""
            UPDATE todos SET {assignments}, updated_at = now()
            WHERE id = $1 AND user_id = $2
            RETURNING *
        """
        record = await db.fetchrow(query, key, user_id, *(changes[c] for c in columns))
        return self._from_record(record) if record else None

    async def delete(self, user_id: str, todo_id: str) -> bool:
        key = self._uuid(todo_id)
        if key is None:
            return False
        status = await db.execute(
            "DELETE FROM todos WHERE id = $1 AND user_id = $2",
            key,
            user_id,
        )
        return status.endswith(" 1")

    async def health(self) -> dict:
        return await db.health_check()
