"""
Task API routes for the Task Management API
Handles list, read, create, update, delete and statistics endpoints
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Session

from ...database.database import get_session
from ...models.task import TaskPublic
from ...models.stats import TaskStats
from ...services.query_builder import build_list_query
from ...services.task_service import TaskService
from ...utils.errors import RequestValidationFailed
from ...validation.task_rules import validate_create, validate_update


router = APIRouter()


# ============ Response schemas ============

class TaskResponse(BaseModel):
    """Single task"""
    success: bool = True
    data: TaskPublic


class TaskMessageResponse(BaseModel):
    """Single task with a confirmation message"""
    success: bool = True
    message: str
    data: TaskPublic


class TaskListResponse(BaseModel):
    """One page of tasks with pagination metadata"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    count: int
    total: int
    current_page: int
    total_pages: int
    data: List[TaskPublic]


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    data: Dict[str, Any] = {}


class StatsResponse(BaseModel):
    success: bool = True
    data: TaskStats


# ============ Endpoints ============

@router.get("", response_model=TaskListResponse)
@router.get("/", response_model=TaskListResponse, include_in_schema=False)
def list_tasks(
    request: Request,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by task status"),
    priority: Optional[str] = Query(None, description="Filter by task priority"),
    search: Optional[str] = Query(None, description="Search in title and description"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10)"),
    sort: Optional[str] = Query(None, description="Field to sort by (default createdAt)"),
    order: Optional[str] = Query(None, description="Sort order: asc or desc (default desc)"),
    session: Session = Depends(get_session),
):
    """
    Get all tasks with optional filtering and pagination.

    Returns:
        The requested page of tasks, the page size, the total number of
        matching tasks, the current page and the total page count
    """
    params = {
        "status": status_filter,
        "priority": priority,
        "search": search,
        "page": page,
        "limit": limit,
        "sort": sort,
        "order": order,
    }
    query = build_list_query(params, max_limit=request.app.state.settings.max_page_limit)
    result = TaskService.list_tasks(session, query)

    return TaskListResponse(
        count=result.count,
        total=result.total,
        current_page=result.page,
        total_pages=result.total_pages,
        data=[TaskPublic.from_task(task) for task in result.tasks],
    )


# Registered before /{task_id} so "stats" is not read as an id
@router.get("/stats", response_model=StatsResponse)
def get_task_stats(session: Session = Depends(get_session)):
    """Get task counts by status and by priority, and the total number of tasks."""
    return StatsResponse(data=TaskService.get_stats(session))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, session: Session = Depends(get_session)):
    """Get a single task by ID."""
    task = TaskService.get_task_by_id(session, task_id)
    return TaskResponse(data=TaskPublic.from_task(task))


@router.post("", response_model=TaskMessageResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TaskMessageResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_task(payload: Any = Body(None), session: Session = Depends(get_session)):
    """
    Create a new task.

    Body: { title, description, status?, priority?, dueDate?, tags? }
    """
    result = validate_create(payload)
    if not result.ok:
        raise RequestValidationFailed(result.errors)

    task = TaskService.create_task(session, result.value)
    return TaskMessageResponse(message="Task created successfully", data=TaskPublic.from_task(task))


@router.put("/{task_id}", response_model=TaskMessageResponse)
def update_task(task_id: str, payload: Any = Body(None), session: Session = Depends(get_session)):
    """
    Update an existing task. Only the supplied fields change.

    Body: { title?, description?, status?, priority?, dueDate?, tags? }
    """
    result = validate_update({} if payload is None else payload)
    if not result.ok:
        raise RequestValidationFailed(result.errors)

    task = TaskService.update_task(session, task_id, result.value)
    return TaskMessageResponse(message="Task updated successfully", data=TaskPublic.from_task(task))


@router.delete("/{task_id}", response_model=DeleteResponse)
def delete_task(task_id: str, session: Session = Depends(get_session)):
    """Delete a task."""
    TaskService.delete_task(session, task_id)
    return DeleteResponse(message="Task deleted successfully")
