from datetime import datetime, timezone
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core import security
from ..db import models

logger = logging.getLogger(__name__)


def _get_by_login(session: Session, login: str) -> models.AdminUser | None:
    return session.execute(
        select(models.AdminUser).where(models.AdminUser.login == login)
    ).scalar_one_or_none()


def ensure_admin_exists(session: Session, login: str, password: str) -> models.AdminUser:
    """Create the bootstrap admin account, or bring its password and role in line."""
    admin = _get_by_login(session, login)
    if admin is None:
        admin = models.AdminUser(
            login=login,
            password_hash=security.get_password_hash(password),
            role=models.AdminRole.admin,
        )
        session.add(admin)
        session.commit()
        logger.info("Created default admin user '%s'", login)
        return admin

    changed = False
    if not security.verify_password(password, admin.password_hash):
        admin.password_hash = security.get_password_hash(password)
        changed = True
    if admin.role != models.AdminRole.admin:
        admin.role = models.AdminRole.admin
        changed = True
    if changed:
        session.commit()
        logger.info("Updated default admin user '%s'", login)
    return admin


def authenticate_admin(session: Session, login: str, password: str) -> models.AdminUser | None:
    admin = _get_by_login(session, login)
    if admin is None or not security.verify_password(password, admin.password_hash):
        logger.warning("Failed admin login", extra={"login": login})
        return None
    admin.last_login_at = datetime.now(timezone.utc)
    session.commit()
    return admin
