import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

EMPTY_TEXT = "-"
LOADING_TEXT = "Cargando..."
LINK_TEXT = "Ver"
# Patrón de LinkColumn: las URLs listas muestran "Ver"; "-" y "Cargando..." se ven tal cual
LINK_DISPLAY_PATTERN = rf"#({LINK_TEXT})$"


@dataclass(frozen=True)
class LinkCell:
    state: str  # "empty" | "loading" | "ready"
    url: Optional[str] = None

    @classmethod
    def empty(cls) -> "LinkCell":
        return cls("empty")

    @classmethod
    def loading(cls) -> "LinkCell":
        return cls("loading")

    @classmethod
    def ready(cls, url: str) -> "LinkCell":
        return cls("ready", url)

    def display(self) -> str:
        if self.state == "ready":
            # El fragmento no se envía a MinIO
            return f"{self.url}#{LINK_TEXT}"
        if self.state == "loading":
            return LOADING_TEXT
        return EMPTY_TEXT


def object_name_from_reference(reference: str) -> str:
    """
    Nombre del objeto en el bucket a partir de lo guardado en el avalúo
    (una URL firmada antigua, una ruta o el nombre pelado).
    """
    path = urlsplit(reference).path
    return unquote(path.rstrip("/").split("/")[-1])


def resolve_link(reference: Optional[str], sign: Callable[[str], str]) -> LinkCell:
    """
    Pide una URL firmada nueva cada vez que se pinta la celda.
    Sin referencia no se firma nada; si la firma falla la celda se queda cargando.
    """
    if not reference:
        return LinkCell.empty()
    try:
        return LinkCell.ready(sign(object_name_from_reference(reference)))
    except Exception as e:
        logger.error(f"Error getting signed URL: {e}")
        return LinkCell.loading()
