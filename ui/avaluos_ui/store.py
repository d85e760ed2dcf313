# ui/avaluos_ui/store.py

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from avaluos_ui.backend_client import BackendClient
from avaluos_ui.config import ALLOWED_MIME_TYPES, CACHE_CONTROL, MAX_FILE_SIZE, SIGNED_URL_TTL
from avaluos_ui.errors import AuthError, DocumentosError, ValidationError
from avaluos_ui.queries import QueryClient

logger = logging.getLogger(__name__)

DOCUMENTOS_KEY = ("documentos",)


@dataclass
class FilterState:
    direccion: str = ""
    folio_shit: str = ""
    show_en_proceso: bool = True  # Por default activado
    show_cerrado: bool = False
    show_cancelado: bool = False
    show_enviado: bool = False

    def query_key(self) -> tuple:
        return (
            *DOCUMENTOS_KEY,
            self.direccion,
            self.folio_shit,
            self.show_cerrado,
            self.show_cancelado,
            self.show_enviado,
            self.show_en_proceso,
        )

    def as_params(self) -> Dict[str, Any]:
        return {
            "direccion": self.direccion,
            "folio_shit": self.folio_shit,
            "en_proceso": self.show_en_proceso,
            "cerrado": self.show_cerrado,
            "cancelado": self.show_cancelado,
            "enviado": self.show_enviado,
        }


def size_label(size: int) -> str:
    return f"{size / (1024 * 1024):g}MB"


def validate_file(file, max_size: int = MAX_FILE_SIZE) -> None:
    """Tamaño primero, luego tipo. No hace ninguna llamada de red."""
    if file.size > max_size:
        raise ValidationError(f"El archivo excede el límite de {size_label(max_size)}")
    if file.type not in ALLOWED_MIME_TYPES:
        raise ValidationError("Tipo de archivo no permitido")


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1]


def build_file_name(avaluo: Dict[str, Any], perito: str, document_type: str, filename: str) -> str:
    """
    `{folio_shit}_{documento}.{ext}` o, si el avalúo no tiene folio SHIT,
    `{folio}_{perito}_{documento}.{ext}`.
    """
    if avaluo.get("folio_shit"):
        identifier = avaluo["folio_shit"]
    else:
        identifier = f"{avaluo.get('folio')}_{perito}"
    return f"{identifier}_{document_type}.{file_extension(filename)}"


class DocumentosStore:
    """
    Estado del tablero: filtros, diálogo de subida y el flujo de subida.
    Se crea una instancia por sesión y se pasa a quien la necesite.
    """

    def __init__(self, backend: BackendClient, query_client: Optional[QueryClient] = None):
        self.backend = backend
        self.query_client = query_client

        self.filters = FilterState()

        # Diálogo de subida
        self.is_modal_open = False
        self.selected_avaluo: Optional[Dict[str, Any]] = None
        self.selected_document_type = ""
        self.is_uploading = False
        self.upload_error: Optional[str] = None

    # ---------- filtros ----------

    def set_direccion_filter(self, direccion: str) -> None:
        self.filters.direccion = direccion

    def set_folio_shit_filter(self, folio: str) -> None:
        self.filters.folio_shit = folio

    def set_show_en_proceso(self, show: bool) -> None:
        self.filters.show_en_proceso = show

    def set_show_cerrado(self, show: bool) -> None:
        self.filters.show_cerrado = show

    def set_show_cancelado(self, show: bool) -> None:
        self.filters.show_cancelado = show

    def set_show_enviado(self, show: bool) -> None:
        self.filters.show_enviado = show

    def reset_filters(self) -> None:
        # Solo los textos; las casillas se quedan como están
        self.filters.direccion = ""
        self.filters.folio_shit = ""

    # ---------- diálogo ----------

    def open_modal(self, avaluo: Dict[str, Any], document_type: str) -> None:
        self.is_modal_open = True
        self.selected_avaluo = avaluo
        self.selected_document_type = document_type
        self.upload_error = None

    def close_modal(self) -> None:
        self.is_modal_open = False
        self.selected_avaluo = None
        self.selected_document_type = ""
        self.upload_error = None

    # ---------- almacenamiento ----------

    def get_signed_url(self, path: str) -> str:
        try:
            return self.backend.sign_url(path, SIGNED_URL_TTL)
        except DocumentosError as e:
            logger.error(f"Error getting signed URL for {path}: {e}")
            raise

    def upload_document(self, file) -> bool:
        """
        Valida, sube y enlaza `file` al avalúo y documento seleccionados.
        Devuelve True si todo fue bien. Los errores quedan en `upload_error`.
        """
        avaluo = self.selected_avaluo
        document_type = self.selected_document_type
        self.is_uploading = True
        self.upload_error = None

        try:
            if not avaluo or not document_type:
                raise ValidationError("No hay avalúo seleccionado")

            validate_file(file)

            # Usuario actual y su perito
            user_id = self.backend.get_current_user()
            if not user_id:
                raise AuthError("Usuario no autenticado")
            perito = self.backend.get_perito(user_id)

            file_name = build_file_name(avaluo, perito, document_type, file.name)

            self.backend.put_object(
                file_name,
                file.getvalue(),
                content_type=file.type,
                upsert=True,
                cache_control=CACHE_CONTROL,
            )
            logger.info(f"[UPLOAD] {file_name} subido para avalúo {avaluo.get('id')}")

            signed_url = self.get_signed_url(file_name)

            # Si esto falla el objeto ya subido se queda en el bucket
            self.backend.update_record(avaluo["id"], document_type, signed_url)

            # Recargar la tabla
            if self.query_client is not None:
                self.query_client.invalidate(DOCUMENTOS_KEY)

            self.close_modal()
            return True

        except (DocumentosError, requests.RequestException) as e:
            logger.warning(f"[UPLOAD] Falló la subida: {e}")
            self.upload_error = str(e)
            return False
        finally:
            self.is_uploading = False
