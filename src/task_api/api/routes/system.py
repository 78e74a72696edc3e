"""
System routes for the Task Management API
Liveness probe and a self-describing API index
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()

TASK_ENDPOINTS = {
    "GET /api/tasks": "Get all tasks with optional filtering and pagination",
    "GET /api/tasks/:id": "Get a single task by ID",
    "POST /api/tasks": "Create a new task",
    "PUT /api/tasks/:id": "Update an existing task",
    "DELETE /api/tasks/:id": "Delete a task",
    "GET /api/tasks/stats": "Get task statistics",
}


@router.get("/health")
def health(request: Request):
    """Liveness probe."""
    return {
        "success": True,
        "message": "Task Management API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": request.app.state.settings.environment,
    }


@router.get("/api")
def api_info(request: Request):
    """List the available endpoints."""
    return {
        "success": True,
        "message": "Task Management API",
        "version": request.app.state.settings.api_version,
        "endpoints": {"tasks": TASK_ENDPOINTS},
        "documentation": "See README.md for detailed API documentation",
    }
