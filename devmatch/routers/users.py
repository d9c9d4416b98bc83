# users.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from devmatch.database import get_db
from devmatch.models.user import User
from devmatch.routers.dependencies import get_current_user
from devmatch.schemas.user import UserRead, UserUpdate
from devmatch.services.project_service import get_user_or_404


router = APIRouter(prefix="/users", tags=["users"])


def _apply_update(db: Session, user: User, update: UserUpdate) -> UserRead:
    update_data = update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(user, field, value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.put("/me", response_model=UserRead)
def update_current_user(
    update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    return _apply_update(db, current_user, update)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    return UserRead.model_validate(get_user_or_404(db, user_id))


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    if current_user.id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to update this profile")
    return _apply_update(db, current_user, update)
