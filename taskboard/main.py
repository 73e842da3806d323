import logging
import time
from datetime import datetime, timezone
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskboard import analytics
from taskboard.config import get_settings
from taskboard.errors import StoreError, TaskError, TaskNotFound
from taskboard.filters import DashboardState
from taskboard.lifecycle import apply_update, create_task as build_task
from taskboard.logging_setup import setup_logging
from taskboard.models import ALL, MessageResponse, TaskCreate, TaskResponse, TaskUpdate
from taskboard.store import RedisTaskStore, TaskStore

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="taskboard")
router = APIRouter(prefix=settings.api_prefix)
store = RedisTaskStore.from_settings(settings)

StatusFilter = Literal["ALL", "TODO", "IN_PROGRESS", "COMPLETED"]
PriorityFilter = Literal["ALL", "LOW", "MEDIUM", "HIGH"]


def get_store() -> TaskStore:
    return store


class DashboardResponse(BaseModel):
    tasks: List[TaskResponse]
    total: int
    filtered: int
    summary: analytics.DashboardSummary


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError):
    if isinstance(exc, StoreError):
        logger.error("%s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s -> 400: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@router.get("/health")
def health(store: TaskStore = Depends(get_store)):
    start = time.perf_counter()
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        store.ping()
    except StoreError as exc:
        logger.error("Health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(exc.__cause__ or exc),
                "timestamp": timestamp,
            },
        )
    elapsed_ms = round((time.perf_counter() - start) * 1000)
    return {
        "status": "healthy",
        "database": "connected",
        "responseTime": f"{elapsed_ms}ms",
        "timestamp": timestamp,
    }


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(store: TaskStore = Depends(get_store)):
    return [TaskResponse.from_task(t) for t in store.list_tasks()]


@router.post("/tasks", status_code=201, response_model=TaskResponse)
def create_task(body: TaskCreate, store: TaskStore = Depends(get_store)):
    task = store.create(build_task(body))
    return TaskResponse.from_task(task)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, updates: TaskUpdate, store: TaskStore = Depends(get_store)):
    existing = store.get(task_id)
    if existing is None:
        raise TaskNotFound(task_id)
    saved = store.replace(apply_update(existing, updates))
    if saved is None:
        # deleted between read and write
        raise TaskNotFound(task_id)
    return TaskResponse.from_task(saved)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    if not store.delete(task_id):
        raise TaskNotFound(task_id)
    return MessageResponse(message="Task deleted successfully")


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    q: str = "",
    status: StatusFilter = ALL,
    priority: PriorityFilter = ALL,
    days: Optional[int] = Query(default=None, ge=1, le=366),
    store: TaskStore = Depends(get_store),
):
    state = DashboardState().with_tasks(store.list_tasks()).with_filters(q, status, priority)
    visible = state.visible()
    return DashboardResponse(
        tasks=[TaskResponse.from_task(t) for t in visible],
        total=len(state.tasks),
        filtered=len(visible),
        summary=analytics.summarize(list(state.tasks), days or settings.trend_days),
    )


app.include_router(router)
