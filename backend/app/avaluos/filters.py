# app/avaluos/filters.py

from pydantic import BaseModel
from sqlalchemy import Select, select, or_
from sqlalchemy.orm import Session

from app.db.models import Avaluo


class AvaluoFilters(BaseModel):
    direccion: str = ""
    folio_shit: str = ""
    en_proceso: bool = True
    cerrado: bool = False
    cancelado: bool = False
    enviado: bool = False


def build_avaluos_query(filters: AvaluoFilters) -> Select:
    """
    Construye el SELECT de avalúos visibles para los filtros dados.

    - direccion / folio_shit: coincidencia parcial sin distinguir mayúsculas (vacío = sin filtro)
    - en_proceso / cerrado: OR entre `cerrado = false` y `cerrado = true`;
      si ninguno está activo no se restringe por `cerrado`
    - cancelado: siempre se aplica, nunca se mezclan cancelados y no cancelados
    - enviado: si está activo, solo los que tienen `enviado` no nulo
    - orden ascendente por folio_shit
    """
    stmt = select(Avaluo)

    if filters.direccion:
        stmt = stmt.where(Avaluo.direccion.icontains(filters.direccion, autoescape=True))
    if filters.folio_shit:
        stmt = stmt.where(Avaluo.folio_shit.icontains(filters.folio_shit, autoescape=True))

    conditions = []
    if filters.en_proceso:
        conditions.append(Avaluo.cerrado.is_(False))
    if filters.cerrado:
        conditions.append(Avaluo.cerrado.is_(True))
    if conditions:
        stmt = stmt.where(or_(*conditions))

    stmt = stmt.where(Avaluo.cancelado.is_(filters.cancelado))

    if filters.enviado:
        stmt = stmt.where(Avaluo.enviado.is_not(None))

    return stmt.order_by(Avaluo.folio_shit.asc())


def fetch_avaluos(session: Session, filters: AvaluoFilters) -> list[Avaluo]:
    return list(session.scalars(build_avaluos_query(filters)))
