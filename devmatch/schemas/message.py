from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from devmatch.schemas.user import UserSummary


class MessageCreate(BaseModel):
    content: str


class MessageRead(BaseModel):
    id: int
    project_id: int
    sender: UserSummary
    content: str
    read_by: list[int] = Field(default_factory=list)
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageListResponse(BaseModel):
    messages: list[MessageRead] = Field(default_factory=list)
    has_more: bool = False
