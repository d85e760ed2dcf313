import io
import logging
from datetime import timedelta

from minio import Minio, S3Error

from app.config import (
    MINIO_ENDPOINT,
    MINIO_ACCESS_KEY,
    MINIO_SECRET_KEY,
    MINIO_BUCKET,
    MINIO_SECURE,
    MINIO_PUBLIC_ENDPOINT,
    MINIO_PUBLIC_SECURE,
    MINIO_REGION,
)

logger = logging.getLogger(__name__)

client = Minio(
    endpoint=MINIO_ENDPOINT,
    access_key=MINIO_ACCESS_KEY,
    secret_key=MINIO_SECRET_KEY,
    secure=MINIO_SECURE,
)

# Solo firma URLs: con la región fija no necesita hablar con el host público
public_client = Minio(
    endpoint=MINIO_PUBLIC_ENDPOINT,
    access_key=MINIO_ACCESS_KEY,
    secret_key=MINIO_SECRET_KEY,
    secure=MINIO_PUBLIC_SECURE,
    region=MINIO_REGION,
)


class ObjectExistsError(Exception):
    """El objeto ya existe y no se pidió sobrescribirlo."""


def get_minio_client() -> Minio:
    return client


# Crear bucket si no existe
def _ensure_bucket():
    if not client.bucket_exists(bucket_name=MINIO_BUCKET):
        client.make_bucket(bucket_name=MINIO_BUCKET)


def object_exists(path: str) -> bool:
    try:
        client.stat_object(MINIO_BUCKET, path)
        return True
    except S3Error as e:
        if e.code in ("NoSuchKey", "NoSuchObject", "NoSuchBucket"):
            return False
        raise


def upload_bytes(
    path: str,
    data: bytes,
    content_type: str | None = None,
    cache_control: str | None = None,
    upsert: bool = True,
):
    """
    Sube `data` a MinIO con el nombre `path`.
    Con upsert=True el objeto se reemplaza si ya existía (mismo comportamiento que S3).
    """
    _ensure_bucket()

    if not upsert and object_exists(path):
        raise ObjectExistsError(path)

    metadata = {}
    if cache_control:
        metadata["Cache-Control"] = f"max-age={cache_control}"

    client.put_object(
        MINIO_BUCKET,
        path,
        io.BytesIO(data),
        length=len(data),
        content_type=content_type or "application/octet-stream",
        metadata=metadata or None,
    )
    logger.info(f"[MinIO] Subido {path} ({len(data)} bytes)")


def presigned_url(path: str, expires_in: int = 3600) -> str:
    """
    URL firmada de lectura para `path`. Falla con S3Error si el objeto no existe,
    así el cliente se entera en el momento de resolver el enlace.
    """
    client.stat_object(MINIO_BUCKET, path)
    return public_client.presigned_get_object(
        MINIO_BUCKET,
        path,
        expires=timedelta(seconds=expires_in),
    )
