"""
Query builder for the task list endpoint
Translates query parameters into a filter, a sort and a pagination window
"""
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_FIELD = "created_at"
DEFAULT_ORDER = "desc"

# Largest offset or limit a SQL backend accepts (signed 64-bit)
MAX_SQL_INTEGER = 2 ** 63 - 1

# Public sort keys mapped to model attributes. Unknown keys fall back to the default.
SORTABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "dueDate": "due_date",
    "due_date": "due_date",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


@dataclass
class TaskFilter:
    """Filter terms; None means no restriction on that field"""
    status: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.priority is None and self.search is None


@dataclass
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    descending: bool = True


@dataclass
class TaskListQuery:
    """Everything the repository needs to run one page of the list query"""
    filter: TaskFilter = field(default_factory=TaskFilter)
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _text_param(params: Mapping[str, Any], name: str) -> Optional[str]:
    value = params.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if 1 <= number <= MAX_SQL_INTEGER else default


def build_list_query(params: Mapping[str, Any], max_limit: Optional[int] = None) -> TaskListQuery:
    """
    Build the list query from raw query parameters.

    Recognized parameters: status, priority, search, page, limit, sort, order.
    Anything else is ignored.

    Args:
        params: Query parameters of the request
        max_limit: Upper bound for `limit`; no bound when None

    Returns:
        TaskListQuery with filter, sort and pagination window
    """
    task_filter = TaskFilter(
        status=_text_param(params, "status"),
        priority=_text_param(params, "priority"),
        search=_text_param(params, "search"),
    )

    page = _positive_int(params.get("page"), DEFAULT_PAGE)
    limit = _positive_int(params.get("limit"), DEFAULT_LIMIT)
    if max_limit is not None:
        limit = min(limit, max_limit)
    # a page whose offset does not fit the database integer range falls back to the first page
    if (page - 1) * limit > MAX_SQL_INTEGER:
        page = DEFAULT_PAGE

    sort_key = _text_param(params, "sort")
    order = _text_param(params, "order") or DEFAULT_ORDER
    sort = SortSpec(
        field=SORTABLE_FIELDS.get(sort_key, DEFAULT_SORT_FIELD) if sort_key else DEFAULT_SORT_FIELD,
        descending=order.lower() == "desc",
    )

    return TaskListQuery(filter=task_filter, sort=sort, page=page, limit=limit)


__all__ = [
    "TaskFilter",
    "SortSpec",
    "TaskListQuery",
    "SORTABLE_FIELDS",
    "build_list_query",
]
