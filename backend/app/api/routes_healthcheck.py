# app/api/routes_healthcheck.py
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from app.db.database import engine
from app.storage.minio_client import get_minio_client

router = APIRouter()


class DependencyStatus(BaseModel):
    ok: bool
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str  # "ok" | "degraded" | "error"
    minio: DependencyStatus
    database: DependencyStatus


@router.get("/health", response_model=HealthResponse)
def healthcheck():
    # --- MinIO ---
    minio_ok = True
    minio_detail = "ok"
    try:
        s3 = get_minio_client()
        # list_buckets solo para ver si responde
        list(s3.list_buckets())
    except Exception as e:
        minio_ok = False
        minio_detail = f"MinIO error: {e}"

    # --- Base de datos ---
    db_ok = True
    db_detail = "ok"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        db_ok = False
        db_detail = f"Database error: {e}"

    # --- Estado global ---
    if minio_ok and db_ok:
        status = "ok"
    elif minio_ok or db_ok:
        status = "degraded"
    else:
        status = "error"

    return HealthResponse(
        status=status,
        minio=DependencyStatus(ok=minio_ok, detail=minio_detail),
        database=DependencyStatus(ok=db_ok, detail=db_detail),
    )
