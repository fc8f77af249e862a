import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api import state
from api.dependencies import LLM_PROVIDER, LLM_TIMEOUT_S, get_todo_store
from storage.todo_store import TodoStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(store: TodoStore = Depends(get_todo_store)) -> dict:
    """Health check endpoint for container orchestration."""
    health = {
        "status": "healthy",
        "llm_provider": LLM_PROVIDER,
        "llm_timeout_s": LLM_TIMEOUT_S,
        "store": state.TODO_STORE_BACKEND,
    }

    try:
        store_health = await store.health()
        health["store_health"] = store_health
        if store_health.get("status") != "healthy":
            health["status"] = "degraded"
    except Exception as e:
        logger.warning(f"Store health check failed: {e}")
        health["status"] = "degraded"
        health["store_health"] = {"status": "error", "error": str(e)}

    return health


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
