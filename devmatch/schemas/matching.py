# matching.py
from typing import Optional
from pydantic import BaseModel, Field
from devmatch.schemas.project import ProjectRead
from devmatch.schemas.user import UserSummary


class DeveloperProfile(UserSummary):
    email: str
    title: str = ""
    bio: str = ""
    skills: list[str] = Field(default_factory=list)


class ProjectMatch(BaseModel):
    project: ProjectRead
    matching_skills: list[str] = Field(default_factory=list)
    # 0..100, one decimal
    match_score: float


class DeveloperMatch(BaseModel):
    developer: DeveloperProfile
    common_skills: list[str] = Field(default_factory=list)
    unique_skills: list[str] = Field(default_factory=list)
    # 0..100, one decimal
    compatibility_score: float


class MatchingResponse(BaseModel):
    projects: list[ProjectMatch] = Field(default_factory=list)
    developers: list[DeveloperMatch] = Field(default_factory=list)
    message: Optional[str] = None


class ProjectRecommendationResponse(BaseModel):
    projects: list[ProjectMatch] = Field(default_factory=list)
    message: Optional[str] = None
