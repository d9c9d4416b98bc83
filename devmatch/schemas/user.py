# user.py
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devmatch.schemas.skills import normalize_skill_list


_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _validate_email_like(v: str) -> str:
    value = (v or "").strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


class UserLinks(BaseModel):
    github: str = ""
    linkedin: str = ""
    portfolio: str = ""
    twitter: str = ""


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        value = v.strip()
        if not value:
            raise ValueError("name is required")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _validate_email_like(v)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        # bcrypt only accepts up to 72 bytes.
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return v


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return _validate_email_like(v)


class UserSummary(BaseModel):
    id: int
    name: str
    image: str = ""

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserSummary):
    email: str
    bio: str = ""
    title: str = ""
    skills: list[str] = Field(default_factory=list)
    links: UserLinks = Field(default_factory=UserLinks)
    account_type: str = "credentials"
    created_at: Optional[datetime] = None

    @field_validator("links", mode="before")
    @classmethod
    def _coerce_links(cls, v):
        return v or {}


class UserUpdate(BaseModel):
    name: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
    title: Optional[str] = None
    skills: Optional[list[str]] = None
    links: Optional[UserLinks] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        value = v.strip()
        if not value:
            raise ValueError("name cannot be blank")
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v):
        if v is None:
            return None
        return normalize_skill_list(v)


class Token(BaseModel):
    access_token: str
    token_type: str
