from app.core import security
from app.db import models
from app.services import admin_service


def test_ensure_admin_creates_account(db_session):
    admin = admin_service.ensure_admin_exists(db_session, "admin", "s3cret")

    assert admin.id is not None
    assert admin.role == models.AdminRole.admin
    assert security.verify_password("s3cret", admin.password_hash)


def test_ensure_admin_resets_password_and_role(db_session):
    db_session.add(
        models.AdminUser(
            login="admin",
            password_hash=security.get_password_hash("old"),
            role=models.AdminRole.viewer,
        )
    )
    db_session.commit()

    admin = admin_service.ensure_admin_exists(db_session, "admin", "new")

    assert admin.role == models.AdminRole.admin
    assert security.verify_password("new", admin.password_hash)
    assert db_session.query(models.AdminUser).count() == 1


def test_authenticate_admin(db_session):
    admin_service.ensure_admin_exists(db_session, "admin", "s3cret")

    assert admin_service.authenticate_admin(db_session, "admin", "wrong") is None
    assert admin_service.authenticate_admin(db_session, "ghost", "s3cret") is None
    admin = admin_service.authenticate_admin(db_session, "admin", "s3cret")
    assert admin is not None
    assert admin.last_login_at is not None


def test_access_token_round_trip():
    token = security.create_access_token({"sub": "7", "role": "admin"})

    payload = security.decode_access_token(token)

    assert payload["sub"] == "7"
    assert payload["role"] == "admin"
