from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from devmatch.database import get_db
from devmatch.models.project import Project
from devmatch.models.task import Task
from devmatch.models.user import User
from devmatch.routers.dependencies import get_current_user
from devmatch.schemas.task import TaskCreate, TaskRead, TaskUpdate
from devmatch.services import project_service


router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


def _get_task_or_404(db: Session, project: Project, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.project_id == project.id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


def _check_assignee(project: Project, assigned_to_id: int | None) -> None:
    if assigned_to_id is not None and not project_service.is_member(project, assigned_to_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Assignee must be a project member")


@router.get("", response_model=list[TaskRead])
def list_tasks(project_id: int, db: Session = Depends(get_db)) -> list[TaskRead]:
    project = project_service.get_project_or_404(db, project_id)
    tasks = db.query(Task).filter(Task.project_id == project.id).order_by(Task.id).all()
    return [TaskRead.model_validate(t) for t in tasks]


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    project_id: int,
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_member(project, current_user)
    _check_assignee(project, payload.assigned_to_id)

    task = Task(project_id=project.id, created_by_id=current_user.id, **payload.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    return TaskRead.model_validate(task)


@router.get("/{task_id}", response_model=TaskRead)
def read_task(project_id: int, task_id: int, db: Session = Depends(get_db)) -> TaskRead:
    project = project_service.get_project_or_404(db, project_id)
    return TaskRead.model_validate(_get_task_or_404(db, project, task_id))


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    project_id: int,
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TaskRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_member(project, current_user)
    task = _get_task_or_404(db, project, task_id)

    update_data = payload.model_dump(exclude_unset=True)
    if "assigned_to_id" in update_data:
        _check_assignee(project, update_data["assigned_to_id"])
    if "title" in update_data and not (update_data["title"] or "").strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Task title is required")
    for field, value in update_data.items():
        if value is None and field != "assigned_to_id":
            continue
        setattr(task, field, value)
    db.add(task)
    db.commit()
    db.refresh(task)
    return TaskRead.model_validate(task)


@router.delete("/{task_id}")
def delete_task(
    project_id: int,
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    task = _get_task_or_404(db, project, task_id)
    allowed = project_service.can_manage(project, current_user.id) or task.created_by_id == current_user.id
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to delete this task")
    db.delete(task)
    db.commit()
    return {"message": "Task deleted successfully"}
