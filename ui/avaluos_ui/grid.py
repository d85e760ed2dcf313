# ui/avaluos_ui/grid.py

import math
from typing import Any, Callable, Dict, List

import pandas as pd

from avaluos_ui.links import EMPTY_TEXT, resolve_link

# (campo, encabezado, tipo)
COLUMNS = [
    ("direccion", "Dirección", "text"),
    ("folio_shit", "Folio SHIT", "text"),
    ("escritura", "Escritura", "link"),
    ("rpp", "RPP", "link"),
    ("num_oficial", "Núm. Oficial", "link"),
    ("predial", "Predial", "link"),
    ("agua", "Agua", "link"),
    ("luz", "Luz", "link"),
    ("prueba_edad", "Prueba Edad", "link"),
    ("ine_comp", "INE Comp", "link"),
    ("rfc_comp", "RFC Comp", "link"),
    ("nss", "NSS", "boolean"),
    ("ine_vend", "INE Vend", "link"),
    ("rfc_vend", "RFC Vend", "link"),
    ("solicitud", "Solicitud", "link"),
    ("plano", "Plano", "link"),
]

# Celdas que no abren el diálogo de subida
NON_DOCUMENT_FIELDS = ("direccion", "folio_shit", "nss")

HEADERS = {field: header for field, header, _ in COLUMNS}

PAGE_SIZE_OPTIONS = (10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 25


def is_uploadable(field: str) -> bool:
    return field in HEADERS and field not in NON_DOCUMENT_FIELDS


DOCUMENT_FIELDS = [field for field in HEADERS if is_uploadable(field)]


def render_nss(value: Any) -> str:
    if value is None:
        return EMPTY_TEXT
    return "Sí" if value else "No"


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(items: List[Any], page: int, page_size: int) -> List[Any]:
    """Página `page` (desde 1); fuera de rango se ajusta a la primera o la última."""
    page = min(max(page, 1), page_count(len(items), page_size))
    start = (page - 1) * page_size
    return items[start:start + page_size]


def build_rows(avaluos: List[Dict[str, Any]], sign: Callable[[str], str]) -> List[Dict[str, Any]]:
    """
    Valor de cada celda. Los documentos se firman aquí, en cada pintado, así que
    solo hay que pasarle los avalúos de la página visible.
    """
    rows = []
    for avaluo in avaluos:
        row = {}
        for field, _, kind in COLUMNS:
            value = avaluo.get(field)
            if kind == "link":
                row[field] = resolve_link(value, sign).display()
            elif kind == "boolean":
                row[field] = render_nss(value)
            else:
                row[field] = value or EMPTY_TEXT
        rows.append(row)
    return rows


def rows_to_dataframe(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    fields = [field for field, _, _ in COLUMNS]
    df = pd.DataFrame(rows, columns=fields)
    return df.rename(columns=HEADERS)


def avaluos_to_dataframe(avaluos: List[Dict[str, Any]]) -> pd.DataFrame:
    """Vista exportable: documentos como 'Sí'/'No' en lugar de URLs que caducan."""
    records = []
    for avaluo in avaluos:
        record = {}
        for field, header, kind in COLUMNS:
            value = avaluo.get(field)
            if kind == "text":
                record[header] = value or ""
            else:
                record[header] = "Sí" if value else "No"
        record["Cerrado"] = "Sí" if avaluo.get("cerrado") else "No"
        record["Cancelado"] = "Sí" if avaluo.get("cancelado") else "No"
        record["Enviado"] = avaluo.get("enviado") or ""
        records.append(record)

    columns = [header for _, header, _ in COLUMNS] + ["Cerrado", "Cancelado", "Enviado"]
    return pd.DataFrame(records, columns=columns)
