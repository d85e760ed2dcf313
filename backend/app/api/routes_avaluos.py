# app/api/routes_avaluos.py

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.avaluos.filters import AvaluoFilters, fetch_avaluos
from app.db.database import get_session
from app.db.models import Avaluo, DOCUMENT_SLOTS

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/avaluos", tags=["avaluos"])


class AvaluoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    direccion: Optional[str] = None
    folio_shit: Optional[str] = None
    folio: Optional[str] = None
    escritura: Optional[str] = None
    rpp: Optional[str] = None
    num_oficial: Optional[str] = None
    predial: Optional[str] = None
    agua: Optional[str] = None
    luz: Optional[str] = None
    prueba_edad: Optional[str] = None
    ine_comp: Optional[str] = None
    rfc_comp: Optional[str] = None
    nss: Optional[str] = None
    ine_vend: Optional[str] = None
    rfc_vend: Optional[str] = None
    solicitud: Optional[str] = None
    plano: Optional[str] = None
    cerrado: bool = False
    cancelado: bool = False
    enviado: Optional[datetime] = None


class FieldUpdate(BaseModel):
    field: str
    value: Optional[str] = None


@router.get("", response_model=List[AvaluoOut])
def list_avaluos(
    filters: AvaluoFilters = Depends(),
    session: Session = Depends(get_session),
    _user_id: str = Depends(get_current_user_id),
):
    try:
        return fetch_avaluos(session, filters)
    except SQLAlchemyError as e:
        logger.exception("Error consultando avalúos")
        raise HTTPException(
            status_code=500,
            detail={
                "error_code": "QUERY_ERROR",
                "message": "Error al consultar los avalúos.",
                "details": str(e),
            },
        )


@router.patch("/{avaluo_id}", response_model=AvaluoOut)
def update_avaluo_field(
    avaluo_id: int,
    req: FieldUpdate,
    session: Session = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """Actualiza un único campo de documento del avalúo."""
    if req.field not in DOCUMENT_SLOTS:
        raise HTTPException(
            status_code=422,
            detail={
                "error_code": "INVALID_FIELD",
                "message": f"El campo '{req.field}' no es un documento",
            },
        )

    avaluo = session.get(Avaluo, avaluo_id)
    if avaluo is None:
        raise HTTPException(
            status_code=404,
            detail={
                "error_code": "AVALUO_NOT_FOUND",
                "message": f"No existe el avalúo {avaluo_id}",
            },
        )

    try:
        setattr(avaluo, req.field, req.value)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error actualizando avalúo {avaluo_id}.{req.field}")
        raise HTTPException(
            status_code=500,
            detail={
                "error_code": "UPDATE_ERROR",
                "message": "Error al actualizar el avalúo.",
                "details": str(e),
            },
        )

    logger.info(f"[AVALUOS] {user_id} actualizó {avaluo_id}.{req.field}")
    session.refresh(avaluo)
    return avaluo
