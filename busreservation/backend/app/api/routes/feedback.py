from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ...api import deps
from ...db.session import get_db
from ...db import models, schemas
from ...services import feedback_service

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=schemas.Created, status_code=status.HTTP_201_CREATED)
def submit_feedback(payload: schemas.FeedbackCreate, db: Session = Depends(get_db)):
    entry = feedback_service.submit_feedback(db, **payload.model_dump())
    return schemas.Created(message="Feedback submitted successfully", id=entry.id)


@router.get("", response_model=schemas.FeedbackList)
def list_feedback(
    db: Session = Depends(get_db),
    _: models.AdminUser = Depends(deps.require_roles(*deps.ADMIN_READ_ROLES)),
):
    entries = feedback_service.list_feedback(db)
    return schemas.FeedbackList(
        feedback=[schemas.Feedback.model_validate(entry) for entry in entries]
    )
