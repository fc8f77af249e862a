import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import state
from api.routers import ai, ops, todos
from storage import db
from storage.todo_store import InMemoryTodoStore, PostgresTodoStore
from todo_ai.errors import TodoAIError

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "요청 형식이 올바르지 않아"

app = FastAPI(title="AI Todo Manager")

app.include_router(ai.router)
app.include_router(todos.router)
app.include_router(ops.router)


@app.exception_handler(TodoAIError)
async def todo_ai_error_handler(request: Request, exc: TodoAIError) -> JSONResponse:
    headers = {"Retry-After": str(exc.retry_after_s)} if exc.retryable and exc.retry_after_s else None
    return JSONResponse(exc.to_payload(), status_code=exc.status_code, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": INVALID_REQUEST_MESSAGE}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


@app.on_event("startup")
async def startup() -> None:
    if state.TODO_STORE_BACKEND == "postgres":
        await db.init_db_pool()
        await db.init_schema()
        state.todo_store = PostgresTodoStore()
        logger.info("Using PostgreSQL todo store")
    else:
        state.todo_store = InMemoryTodoStore()
        logger.info("Using in-memory todo store")


@app.on_event("shutdown")
async def shutdown() -> None:
    if state.TODO_STORE_BACKEND == "postgres":
        await db.close_db_pool()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
