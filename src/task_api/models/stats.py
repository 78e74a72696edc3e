"""
Statistics models for the Task Management API
Aggregated task counts grouped by status and by priority
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StatusStat(BaseModel):
    """Task count for one status, with the average priority weight of the group"""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(alias="_id")
    count: int
    avg_priority: float = Field(alias="avgPriority")


class PriorityStat(BaseModel):
    """Task count for one priority"""
    model_config = ConfigDict(populate_by_name=True)

    priority: str = Field(alias="_id")
    count: int


class TaskStats(BaseModel):
    """Statistics payload returned by the stats endpoint"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_stats: List[StatusStat]
    priority_stats: List[PriorityStat]
    total_tasks: int
