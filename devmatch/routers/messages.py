from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload

from devmatch.database import get_db
from devmatch.models.message import Message
from devmatch.models.user import User
from devmatch.routers.dependencies import get_current_user
from devmatch.schemas.message import MessageCreate, MessageListResponse, MessageRead
from devmatch.services import project_service


router = APIRouter(prefix="/projects/{project_id}/messages", tags=["messages"])


@router.get("", response_model=MessageListResponse)
def list_messages(
    project_id: int,
    limit: int = Query(default=50, ge=1, le=200),
    before: int | None = Query(default=None, description="Only messages older than this message id"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageListResponse:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_member(project, current_user)

    query = db.query(Message).options(selectinload(Message.sender)).filter(Message.project_id == project.id)
    if before is not None:
        anchor = db.query(Message).filter(Message.id == before, Message.project_id == project.id).first()
        if anchor is not None:
            query = query.filter(
                or_(
                    Message.created_at < anchor.created_at,
                    and_(Message.created_at == anchor.created_at, Message.id < anchor.id),
                )
            )

    messages = query.order_by(Message.created_at.desc(), Message.id.desc()).limit(limit).all()

    # Everything returned to the caller counts as read by them.
    changed = False
    for message in messages:
        readers = list(message.read_by or [])
        if current_user.id not in readers:
            message.read_by = readers + [current_user.id]
            changed = True
    if changed:
        db.commit()

    messages.reverse()
    return MessageListResponse(
        messages=[MessageRead.model_validate(m) for m in messages],
        has_more=len(messages) == limit,
    )


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    project_id: int,
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    project = project_service.get_project_or_404(db, project_id)
    project_service.require_member(project, current_user)

    content = (payload.content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content is required")

    message = Message(project_id=project.id, sender_id=current_user.id, content=content, read_by=[current_user.id])
    db.add(message)
    db.commit()
    db.refresh(message)
    return MessageRead.model_validate(message)
