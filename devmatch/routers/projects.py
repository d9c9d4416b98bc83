from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from devmatch.database import get_db
from devmatch.models.project import Project, ProjectMember
from devmatch.models.user import User
from devmatch.routers.dependencies import get_current_user
from devmatch.schemas.project import (
    MemberAdd,
    MemberRead,
    MemberRoleUpdate,
    Pagination,
    ProjectCreate,
    ProjectListResponse,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
)
from devmatch.schemas.skills import normalize_skill_list
from devmatch.services import project_service


router = APIRouter(prefix="/projects", tags=["projects"])

logger = logging.getLogger(__name__)


@router.get("", response_model=ProjectListResponse)
def list_projects(
    limit: int = Query(default=10, ge=1, le=100),
    page: int = Query(default=1, ge=1),
    skills: str | None = Query(default=None, description="Comma-separated skill labels"),
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    q: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ProjectListResponse:
    query = db.query(Project).options(
        selectinload(Project.owner),
        selectinload(Project.members).selectinload(ProjectMember.user),
    )
    if status_filter:
        query = query.filter(Project.status == status_filter)
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(Project.title.ilike(pattern), Project.description.ilike(pattern)))
    query = query.order_by(Project.created_at.desc(), Project.id.desc())

    wanted = set(normalize_skill_list(skills))
    offset = (page - 1) * limit
    if wanted:
        # required_skills is a JSON list; match any of the requested labels.
        rows = [p for p in query.all() if wanted.intersection(p.required_skills or [])]
        total = len(rows)
        rows = rows[offset : offset + limit]
    else:
        total = query.count()
        rows = query.offset(offset).limit(limit).all()

    return ProjectListResponse(
        projects=[ProjectRead.model_validate(p) for p in rows],
        pagination=Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
    )


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectRead:
    project = project_service.create_project(db, current_user, **payload.model_dump())
    logger.info("projects.create project_id=%s owner_id=%s", project.id, current_user.id)
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectRead)
def read_project(project_id: int, db: Session = Depends(get_db)) -> ProjectRead:
    return ProjectRead.model_validate(project_service.get_project_or_404(db, project_id))


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_manager(project, current_user, "Not authorized to update this project")

    update_data = payload.model_dump(exclude_unset=True)
    for field in ("title", "description"):
        value = update_data.get(field)
        if value is not None and not value.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} cannot be blank")
    for field, value in update_data.items():
        if value is None:
            continue
        setattr(project, field, value)
    db.add(project)
    db.commit()
    return ProjectRead.model_validate(project_service.get_project_or_404(db, project_id))


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    if not project_service.is_owner(project, current_user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the project owner can delete a project")
    db.delete(project)
    db.commit()
    logger.info("projects.delete project_id=%s", project_id)
    return {"message": "Project deleted successfully"}


# ---------------- Members ----------------
@router.get("/{project_id}/members", response_model=list[MemberRead])
def list_members(project_id: int, db: Session = Depends(get_db)) -> list[MemberRead]:
    project = project_service.get_project_or_404(db, project_id)
    return [MemberRead.model_validate(m) for m in project.members]


@router.post("/{project_id}/members", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
def add_member(
    project_id: int,
    payload: MemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MemberRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_manager(project, current_user, "Not authorized to add members to this project")
    project_service.get_user_or_404(db, payload.user_id)
    member = project_service.add_member(db, project, payload.user_id, payload.role)
    return MemberRead.model_validate(member)


@router.post("/{project_id}/join", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
def join_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MemberRead:
    project = project_service.get_project_or_404(db, project_id)
    member = project_service.add_member(db, project, current_user.id)
    logger.info("projects.join project_id=%s user_id=%s", project_id, current_user.id)
    return MemberRead.model_validate(member)


@router.patch("/{project_id}/members/{user_id}", response_model=MemberRead)
def update_member_role(
    project_id: int,
    user_id: int,
    payload: MemberRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MemberRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_manager(project, current_user, "Not authorized to update member roles in this project")
    if project_service.is_owner(project, user_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot change the role of the project owner")

    member = project_service.find_member(project, user_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found in this project")
    member.role = payload.role
    db.add(member)
    db.commit()
    db.refresh(member)
    return MemberRead.model_validate(member)


@router.delete("/{project_id}/members/{user_id}")
def remove_member(
    project_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    is_self_removal = user_id == current_user.id
    if not is_self_removal:
        project_service.require_manager(project, current_user, "Not authorized to remove members from this project")
    if project_service.is_owner(project, user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove the project owner. Transfer ownership first or delete the project.",
        )

    member = project_service.find_member(project, user_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found in this project")
    project.members.remove(member)
    db.commit()
    return {"message": "You have left the project" if is_self_removal else "Member removed successfully"}
