from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from ...core.constants import MAX_INT_VALUE
from ...api import deps
from ...db.session import get_db
from ...db import models, schemas
from ...services import contact_service

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=schemas.Created, status_code=status.HTTP_201_CREATED)
def submit_message(payload: schemas.ContactMessageCreate, db: Session = Depends(get_db)):
    entry = contact_service.submit_message(db, **payload.model_dump())
    return schemas.Created(message="Message sent successfully", id=entry.id)


@router.get("/messages", response_model=schemas.ContactMessageList)
def list_messages(
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(deps.require_roles(*deps.ADMIN_READ_ROLES)),
):
    messages = [
        schemas.ContactMessage.model_validate(entry).model_copy(update={"status": entry.status.value})
        for entry in contact_service.list_messages(db)
    ]
    return schemas.ContactMessageList(messages=messages)


@router.post("/messages/{message_id}/reply")
def reply_to_message(
    payload: schemas.ContactReply,
    message_id: int = Path(gt=0, le=MAX_INT_VALUE),
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(deps.require_roles(*deps.ADMIN_WRITE_ROLES)),
):
    entry = contact_service.reply_to_message(db, message_id, payload.reply)
    if entry is None:
        raise HTTPException(status_code=404, detail="Message not found")
    return {"message": "Reply saved successfully"}
