import importlib
import json

import pytest
from fastapi.testclient import TestClient

from api import dependencies
from llm.llm_client import LLMClient
from storage.todo_store import InMemoryTodoStore

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def client(fixed_now):
    mod = importlib.import_module("api.main")
    store = InMemoryTodoStore()
    mod.app.dependency_overrides[dependencies.get_todo_store] = lambda: store
    mod.app.dependency_overrides[dependencies.get_clock] = lambda: (lambda: fixed_now)
    yield TestClient(mod.app)
    mod.app.dependency_overrides.clear()


def test_requires_user(client):
    r = client.get("/todos")
    assert r.status_code == 401
    assert r.json() == {"error": "로그인이 필요해"}


def test_crud_scoped_by_owner(client):
    r = client.post("/todos", json={"title": "장보기", "priority": "low", "category": ["개인"]}, headers=ALICE)
    assert r.status_code == 201
    todo_id = r.json()["id"]

    assert client.get(f"/todos/{todo_id}", headers=ALICE).status_code == 200
    assert client.get(f"/todos/{todo_id}", headers=BOB).status_code == 404
    assert client.get("/todos", headers=BOB).json()["total"] == 0

    r = client.patch(f"/todos/{todo_id}", json={"completed": True}, headers=ALICE)
    assert r.status_code == 200
    assert r.json()["completed"] is True
    assert r.json()["completed_at"] is not None

    r = client.patch(f"/todos/{todo_id}", json={"completed": False}, headers=ALICE)
    assert r.json()["completed_at"] is None

    assert client.delete(f"/todos/{todo_id}", headers=BOB).status_code == 404
    assert client.delete(f"/todos/{todo_id}", headers=ALICE).json() == {"status": "deleted"}
    assert client.get("/todos", headers=ALICE).json()["total"] == 0


def test_blank_title_rejected(client):
    r = client.post("/todos", json={"title": "   "}, headers=ALICE)
    assert r.status_code == 400
    assert "error" in r.json()


def test_list_filters_and_sorting(client):
    client.post("/todos", json={"title": "보고서", "priority": "medium", "due_date": "2026-10-20T09:00:00+09:00"}, headers=ALICE)
    client.post("/todos", json={"title": "운동", "priority": "high", "description": "헬스장"}, headers=ALICE)
    r = client.post("/todos", json={"title": "책 읽기", "priority": "low", "due_date": "2026-10-15T09:00:00+09:00"}, headers=ALICE)
    client.patch(f"/todos/{r.json()['id']}", json={"completed": True}, headers=ALICE)

    body = client.get("/todos", headers=ALICE).json()
    assert [t["title"] for t in body["todos"]] == ["책 읽기", "운동", "보고서"]
    assert (body["total"], body["completed"], body["active"]) == (3, 1, 2)

    by_priority = client.get("/todos?sort=priority", headers=ALICE).json()["todos"]
    assert [t["title"] for t in by_priority] == ["운동", "보고서", "책 읽기"]

    by_due = client.get("/todos?sort=dueDate", headers=ALICE).json()["todos"]
    assert [t["title"] for t in by_due] == ["책 읽기", "보고서", "운동"]

    active = client.get("/todos?status=active", headers=ALICE).json()["todos"]
    assert {t["title"] for t in active} == {"보고서", "운동"}

    assert [t["title"] for t in client.get("/todos?q=헬스", headers=ALICE).json()["todos"]] == ["운동"]
    assert [t["title"] for t in client.get("/todos?priority=low", headers=ALICE).json()["todos"]] == ["책 읽기"]


def test_invalid_filter_value(client):
    r = client.get("/todos?sort=random", headers=ALICE)
    assert r.status_code == 400


def test_analysis_of_stored_todos(client, fake_provider_factory):
    provider = fake_provider_factory(json.dumps({
        "summary": "총 1개 중 0개 완료! (0.0%)",
        "urgentTasks": ["발표 준비"],
        "insights": ["a", "b", "c"],
        "recommendations": ["x", "y", "z"],
    }, ensure_ascii=False))
    mod = importlib.import_module("api.main")
    mod.app.dependency_overrides[dependencies.get_llm_factory] = (
        lambda: (lambda: LLMClient(provider=provider, timeout_s=5))
    )

    client.post("/todos", json={"title": "발표 준비", "priority": "high", "due_date": "2026-10-14T18:00:00+09:00"}, headers=ALICE)
    client.post("/todos", json={"title": "다음 달 일", "due_date": "2026-11-20T09:00:00+09:00"}, headers=ALICE)

    r = client.get("/todos/analysis?period=today", headers=ALICE)
    assert r.status_code == 200
    assert r.json()["urgentTasks"] == ["발표 준비"]
    prompt = provider.calls[0]["prompt"]
    assert "발표 준비" in prompt
    assert "다음 달 일" not in prompt


def test_analysis_with_nothing_due_skips_model(client):
    client.post("/todos", json={"title": "다음 달 일", "due_date": "2026-11-20T09:00:00+09:00"}, headers=ALICE)
    r = client.get("/todos/analysis?period=week", headers=ALICE)
    assert r.status_code == 200
    assert r.json()["summary"] == "이번 주 등록된 할 일이 없어. 계획을 세워보는 건 어때?"
