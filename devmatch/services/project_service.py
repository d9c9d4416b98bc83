# project_service.py
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from devmatch.models.project import Project, ProjectMember
from devmatch.models.user import User


ALREADY_MEMBER_DETAIL = "User is already a member of this project"


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = (
        db.query(Project)
        .options(
            selectinload(Project.owner),
            selectinload(Project.members).selectinload(ProjectMember.user),
        )
        .filter(Project.id == project_id)
        .first()
    )
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def find_member(project: Project, user_id: int) -> ProjectMember | None:
    for member in project.members:
        if member.user_id == user_id:
            return member
    return None


def is_member(project: Project, user_id: int) -> bool:
    return find_member(project, user_id) is not None


def is_owner(project: Project, user_id: int) -> bool:
    return project.owner_id == user_id


def can_manage(project: Project, user_id: int) -> bool:
    if is_owner(project, user_id):
        return True
    member = find_member(project, user_id)
    return member is not None and member.role == "admin"


def require_member(project: Project, user: User) -> None:
    if not is_member(project, user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not a member of this project")


def require_manager(project: Project, user: User, detail: str) -> None:
    if not can_manage(project, user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def create_project(db: Session, owner: User, **fields) -> Project:
    project = Project(owner_id=owner.id, **fields)
    # The owner is always a member with the owner role.
    project.members.append(ProjectMember(user_id=owner.id, role="owner"))
    db.add(project)
    db.commit()
    return get_project_or_404(db, project.id)


def add_member(db: Session, project: Project, user_id: int, role: str = "member") -> ProjectMember:
    if is_member(project, user_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_MEMBER_DETAIL)
    member = ProjectMember(user_id=user_id, role=role)
    project.members.append(member)
    db.add(project)
    try:
        db.commit()
    except IntegrityError as exc:
        # Another request added the same user since `project` was loaded.
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_MEMBER_DETAIL) from exc
    db.refresh(member)
    return member
