from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.orm import Session
from ...core import security
from ...db.session import get_db
from ...db import models
from ...config import get_settings
from ...services import admin_service
from .. import deps


router = APIRouter(prefix="/auth", tags=["auth"])


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict


def _admin_payload(admin: models.AdminUser) -> dict:
    return {"id": admin.id, "login": admin.login, "role": models.AdminRole(admin.role).value}


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    admin = admin_service.authenticate_admin(db, form_data.username, form_data.password)
    if not admin:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    settings = get_settings()
    token = security.create_access_token(
        {"sub": str(admin.id), "role": models.AdminRole(admin.role).value},
        timedelta(minutes=settings.jwt_expire_min),
    )
    return TokenResponse(access_token=token, user=_admin_payload(admin))


@router.get("/me")
def me(current: models.AdminUser = Depends(deps.get_current_admin)):
    return _admin_payload(current)
