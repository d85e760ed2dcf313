# app/api/routes_auth.py

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.db.database import get_session
from app.db.models import UserRole

router = APIRouter(tags=["auth"])


class CurrentUser(BaseModel):
    id: str


class UserRoleOut(BaseModel):
    user_id: str
    perito: str | None = None
    role: str | None = None


@router.get("/auth/user", response_model=CurrentUser)
def current_user(user_id: str = Depends(get_current_user_id)):
    return CurrentUser(id=user_id)


@router.get("/user-roles/{user_id}", response_model=UserRoleOut)
def get_user_role(
    user_id: str,
    session: Session = Depends(get_session),
    _caller: str = Depends(get_current_user_id),
):
    """Devuelve el perito asociado a un usuario (404 si no hay mapeo)."""
    row = session.get(UserRole, user_id)
    if row is None or not row.perito:
        raise HTTPException(
            status_code=404,
            detail={
                "error_code": "PERITO_NOT_FOUND",
                "message": "No se encontró información del perito",
            },
        )
    return UserRoleOut(user_id=row.user_id, perito=row.perito, role=row.role)
