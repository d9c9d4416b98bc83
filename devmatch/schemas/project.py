from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devmatch.schemas.skills import normalize_skill_list
from devmatch.schemas.user import UserSummary


ProjectStatus = Literal["planning", "in-progress", "completed", "on-hold"]
MemberRole = Literal["owner", "admin", "member"]


class ProjectBase(BaseModel):
    thumbnail: str = ""
    required_skills: list[str] = Field(default_factory=list)
    status: ProjectStatus = "planning"
    repo_link: str = ""
    demo_link: str = ""

    @field_validator("required_skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v):
        return normalize_skill_list(v)


class ProjectCreate(ProjectBase):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)

    @field_validator("title", "description")
    @classmethod
    def _require_text(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("Title and description are required")
        return value


class ProjectUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    required_skills: list[str] | None = None
    status: ProjectStatus | None = None
    repo_link: str | None = None
    demo_link: str | None = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v):
        if v is None:
            return None
        return normalize_skill_list(v)


class MemberProfile(UserSummary):
    email: str
    title: str = ""
    skills: list[str] = Field(default_factory=list)


class MemberRead(BaseModel):
    # One member shape everywhere: the member's profile plus the membership role.
    user: MemberProfile
    role: MemberRole
    joined_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MemberAdd(BaseModel):
    user_id: int
    role: Literal["admin", "member"] = "member"


class MemberRoleUpdate(BaseModel):
    role: Literal["admin", "member"]


class ProjectRead(ProjectBase):
    id: int
    title: str
    description: str
    owner: UserSummary
    members: list[MemberRead] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class ProjectListResponse(BaseModel):
    projects: list[ProjectRead] = Field(default_factory=list)
    pagination: Pagination
