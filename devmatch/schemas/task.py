from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devmatch.schemas.user import UserSummary


TaskStatus = Literal["todo", "in-progress", "review", "completed"]


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    status: TaskStatus = "todo"
    assigned_to_id: int | None = None

    @field_validator("title")
    @classmethod
    def _require_title(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("Task title is required")
        return value


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    assigned_to_id: int | None = None


class TaskRead(BaseModel):
    id: int
    project_id: int
    title: str
    description: str = ""
    status: TaskStatus
    assigned_to: UserSummary | None = None
    created_by: UserSummary
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
