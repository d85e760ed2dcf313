# ui/avaluos_ui/backend_client.py
"""
Cliente HTTP del backend de avalúos.

Es el único punto del UI que habla con la red: identidad, perito del usuario,
consulta/actualización de avalúos y almacenamiento (subida y URLs firmadas).
Cada fallo se convierte en el error tipado correspondiente de `avaluos_ui.errors`.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from avaluos_ui.config import BACKEND_URL, HTTP_TIMEOUT
from avaluos_ui.errors import AuthError, QueryError, StorageError, UpdateError

logger = logging.getLogger(__name__)


def _detail_message(resp: requests.Response, default: str) -> str:
    try:
        detail = resp.json().get("detail")
    except ValueError:
        return default
    if isinstance(detail, dict):
        return detail.get("message") or default
    if isinstance(detail, str) and detail:
        return detail
    return default


def _flag(value: bool) -> str:
    return "true" if value else "false"


class BackendClient:
    def __init__(
        self,
        base_url: str = BACKEND_URL,
        user_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {"X-User-Id": self.user_id} if self.user_id else {}

    def _request(self, method: str, path: str, error_cls, message: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error(f"[BACKEND] {method} {path} falló: {e}")
            raise error_cls(f"{message}: {e}") from e

    # ---------- identidad ----------

    def get_current_user(self) -> Optional[str]:
        resp = self._request("GET", "/auth/user", AuthError, "No se pudo obtener el usuario")
        if resp.status_code == 401:
            return None
        if resp.status_code != 200:
            raise AuthError(_detail_message(resp, "No se pudo obtener el usuario"))
        return resp.json().get("id")

    def get_perito(self, user_id: str) -> str:
        resp = self._request(
            "GET", f"/user-roles/{user_id}", AuthError, "No se pudo obtener el perito"
        )
        if resp.status_code == 404:
            raise AuthError("No se encontró información del perito")
        if resp.status_code != 200:
            raise AuthError(_detail_message(resp, "No se pudo obtener el perito"))
        perito = resp.json().get("perito")
        if not perito:
            raise AuthError("No se encontró información del perito")
        return perito

    # ---------- avalúos ----------

    def query_avaluos(
        self,
        direccion: str = "",
        folio_shit: str = "",
        en_proceso: bool = True,
        cerrado: bool = False,
        cancelado: bool = False,
        enviado: bool = False,
    ) -> List[Dict[str, Any]]:
        params = {
            "en_proceso": _flag(en_proceso),
            "cerrado": _flag(cerrado),
            "cancelado": _flag(cancelado),
            "enviado": _flag(enviado),
        }
        if direccion:
            params["direccion"] = direccion
        if folio_shit:
            params["folio_shit"] = folio_shit

        resp = self._request(
            "GET", "/avaluos", QueryError, "Error consultando avalúos", params=params
        )
        if resp.status_code != 200:
            raise QueryError(_detail_message(resp, f"Error consultando avalúos ({resp.status_code})"))
        return resp.json() or []

    def update_record(self, avaluo_id: Any, field: str, value: Optional[str]) -> Dict[str, Any]:
        resp = self._request(
            "PATCH",
            f"/avaluos/{avaluo_id}",
            UpdateError,
            "Error actualizando el avalúo",
            json={"field": field, "value": value},
        )
        if resp.status_code != 200:
            raise UpdateError(_detail_message(resp, f"Error actualizando el avalúo ({resp.status_code})"))
        return resp.json()

    # ---------- almacenamiento ----------

    def put_object(
        self,
        name: str,
        data: bytes,
        content_type: str,
        upsert: bool = True,
        cache_control: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = {"upsert": _flag(upsert)}
        if cache_control:
            params["cache_control"] = cache_control

        resp = self._request(
            "PUT",
            f"/storage/objects/{name}",
            StorageError,
            "Error subiendo el archivo",
            params=params,
            files={"file": (name, data, content_type)},
        )
        if resp.status_code != 200:
            raise StorageError(_detail_message(resp, f"Error subiendo el archivo ({resp.status_code})"))
        return resp.json()

    def sign_url(self, name: str, expires_in: int) -> str:
        resp = self._request(
            "POST",
            "/storage/signed-url",
            StorageError,
            "Error obteniendo la URL firmada",
            json={"name": name, "expires_in": expires_in},
        )
        if resp.status_code != 200:
            raise StorageError(_detail_message(resp, f"Error obteniendo la URL firmada ({resp.status_code})"))
        return resp.json()["signed_url"]

    # ---------- salud ----------

    def health(self) -> Dict[str, Any]:
        resp = self.session.get(f"{self.base_url}/health", timeout=10)
        resp.raise_for_status()
        return resp.json()
