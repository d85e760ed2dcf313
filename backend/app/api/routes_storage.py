# app/api/routes_storage.py

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from minio.error import S3Error
from pydantic import BaseModel

from app.api.deps import get_current_user_id
from app.storage.minio_client import ObjectExistsError, presigned_url, upload_bytes

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/storage", tags=["storage"])

MISSING_OBJECT_CODES = ("NoSuchKey", "NoSuchObject", "NoSuchBucket")


class StoredObject(BaseModel):
    name: str
    size: int
    content_type: str | None = None


class SignedUrlRequest(BaseModel):
    name: str
    expires_in: int = 3600


class SignedUrlResponse(BaseModel):
    name: str
    signed_url: str


def _minio_error(e: S3Error) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail={
            "error_code": "MINIO_ERROR",
            "message": "Error al guardar o leer archivos en MinIO.",
            "details": str(e),
        },
    )


@router.put("/objects/{name}", response_model=StoredObject)
async def put_object(
    name: str,
    file: UploadFile = File(...),
    upsert: bool = True,
    cache_control: str | None = "3600",
    _user_id: str = Depends(get_current_user_id),
):
    """
    Guarda el archivo en el bucket con el nombre dado.
    Con upsert=true un objeto con el mismo nombre se reemplaza.
    """
    if not name.strip() or "/" in name or ".." in name:
        raise HTTPException(
            status_code=400,
            detail={"error_code": "INVALID_NAME", "message": "Nombre de objeto inválido"},
        )

    data = await file.read()

    try:
        upload_bytes(
            name,
            data,
            content_type=file.content_type,
            cache_control=cache_control,
            upsert=upsert,
        )
    except ObjectExistsError:
        raise HTTPException(
            status_code=409,
            detail={
                "error_code": "OBJECT_EXISTS",
                "message": f"Ya existe un objeto llamado {name}",
            },
        )
    except S3Error as e:
        raise _minio_error(e)

    return StoredObject(name=name, size=len(data), content_type=file.content_type)


@router.post("/signed-url", response_model=SignedUrlResponse)
def create_signed_url(
    req: SignedUrlRequest,
    _user_id: str = Depends(get_current_user_id),
):
    try:
        url = presigned_url(req.name, expires_in=req.expires_in)
    except S3Error as e:
        if e.code in MISSING_OBJECT_CODES:
            raise HTTPException(
                status_code=404,
                detail={
                    "error_code": "OBJECT_NOT_FOUND",
                    "message": f"No existe el objeto {req.name}",
                },
            )
        raise _minio_error(e)

    return SignedUrlResponse(name=req.name, signed_url=url)
