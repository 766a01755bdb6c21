import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models

logger = logging.getLogger(__name__)


def submit_feedback(
    db: Session, *, name: str, email: str, rating: int, comment: str
) -> models.Feedback:
    if not 1 <= rating <= 5:
        raise ValueError("rating must be between 1 and 5")
    entry = models.Feedback(name=name, email=email, rating=rating, comment=comment)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Feedback received", extra={"feedback_id": entry.id, "rating": rating})
    return entry


def list_feedback(db: Session) -> list[models.Feedback]:
    stmt = select(models.Feedback).order_by(
        models.Feedback.created_at.desc(), models.Feedback.id.desc()
    )
    return list(db.execute(stmt).scalars().all())
