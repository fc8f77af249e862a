import asyncio

from storage.todo_store import InMemoryTodoStore
from todo_ai.models import TodoCreate, TodoUpdate


def test_insert_and_list_newest_first():
    store = InMemoryTodoStore()

    async def run():
        await store.insert("u1", TodoCreate(title="first"))
        await store.insert("u1", TodoCreate(title="second"))
        await store.insert("u2", TodoCreate(title="other user"))
        return await store.list("u1")

    todos = asyncio.run(run())
    assert [t.title for t in todos] == ["second", "first"]
    assert all(t.user_id == "u1" for t in todos)


def test_get_is_owner_scoped():
    store = InMemoryTodoStore()

    async def run():
        todo = await store.insert("u1", TodoCreate(title="mine"))
        return await store.get("u1", todo.id), await store.get("u2", todo.id)

    mine, theirs = asyncio.run(run())
    assert mine is not None
    assert theirs is None


def test_update_tracks_completed_at():
    store = InMemoryTodoStore()

    async def run():
        todo = await store.insert("u1", TodoCreate(title="x", description="d"))
        done = await store.update("u1", todo.id, TodoUpdate(completed=True))
        reopened = await store.update("u1", todo.id, TodoUpdate(completed=False))
        return done, reopened

    done, reopened = asyncio.run(run())
    assert done.completed and done.completed_at is not None
    assert not reopened.completed and reopened.completed_at is None
    assert reopened.description == "d"


def test_update_can_clear_nullable_fields():
    store = InMemoryTodoStore()

    async def run():
        todo = await store.insert("u1", TodoCreate(title="x", description="d"))
        return await store.update("u1", todo.id, TodoUpdate(description=None, title="y"))

    updated = asyncio.run(run())
    assert updated.description is None
    assert updated.title == "y"


def test_update_and_delete_missing():
    store = InMemoryTodoStore()

    async def run():
        return (
            await store.update("u1", "nope", TodoUpdate(title="y")),
            await store.delete("u1", "nope"),
        )

    assert asyncio.run(run()) == (None, False)


def test_delete_removes_row():
    store = InMemoryTodoStore()

    async def run():
        todo = await store.insert("u1", TodoCreate(title="x"))
        deleted = await store.delete("u1", todo.id)
        return deleted, await store.list("u1")

    deleted, remaining = asyncio.run(run())
    assert deleted is True
    assert remaining == []
