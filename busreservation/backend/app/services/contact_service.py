from datetime import datetime, timezone
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models

logger = logging.getLogger(__name__)


def submit_message(db: Session, *, name: str, email: str, message: str) -> models.ContactMessage:
    entry = models.ContactMessage(name=name, email=email, message=message)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Contact message received", extra={"message_id": entry.id})
    return entry


def list_messages(db: Session) -> list[models.ContactMessage]:
    stmt = select(models.ContactMessage).order_by(
        models.ContactMessage.created_at.desc(), models.ContactMessage.id.desc()
    )
    return list(db.execute(stmt).scalars().all())


def reply_to_message(db: Session, message_id: int, reply: str) -> models.ContactMessage | None:
    entry = db.get(models.ContactMessage, message_id)
    if entry is None:
        return None
    entry.admin_reply = reply
    entry.status = models.ContactMessageStatus.replied
    entry.replied_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(entry)
    return entry
