# project.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from devmatch.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=False)
    thumbnail = Column(String(1024), nullable=False, default="")

    # Free-text skill labels: list[str]
    required_skills = Column(JSON, nullable=False, default=list)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="planning", index=True)
    repo_link = Column(String(1024), nullable=False, default="")
    demo_link = Column(String(1024), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=_utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now, nullable=False)

    owner = relationship("User")
    members = relationship(
        "ProjectMember",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectMember.id",
    )
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan", order_by="Task.id")
    messages = relationship("Message", back_populates="project", cascade="all, delete-orphan")


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),)

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # owner | admin | member
    role = Column(String(16), nullable=False, default="member")
    joined_at = Column(DateTime(timezone=True), default=_utc_now, nullable=False)

    project = relationship("Project", back_populates="members")
    user = relationship("User")
