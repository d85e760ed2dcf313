import logging

import streamlit as st

from avaluos_ui.backend_client import BackendClient
from avaluos_ui.config import AVALUOS_USER_ID, BACKEND_URL, MAX_FILE_SIZE, REFRESH_SECONDS
from avaluos_ui.grid import (
    COLUMNS,
    DEFAULT_PAGE_SIZE,
    DOCUMENT_FIELDS,
    HEADERS,
    PAGE_SIZE_OPTIONS,
    avaluos_to_dataframe,
    build_rows,
    page_count,
    paginate,
    rows_to_dataframe,
)
from avaluos_ui.links import LINK_DISPLAY_PATTERN
from avaluos_ui.queries import QueryClient
from avaluos_ui.store import DOCUMENTOS_KEY, DocumentosStore, size_label

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("avaluos_ui")

# ----------------------------
# 🎨 Configuración básica UI
# ----------------------------
st.set_page_config(
    page_title="Documentos de avalúos",
    page_icon="📁",
    layout="wide",
)


# ----------------------------
# 🔁 Estado de sesión
# ----------------------------
AVISO_GUARDADO = "Documento guardado, recargando tabla…"


def _on_documentos_invalidated(key):
    # Una invalidación avisa una vez por cada combinación de filtros en caché
    avisos = st.session_state.setdefault("avisos", [])
    if AVISO_GUARDADO not in avisos:
        avisos.append(AVISO_GUARDADO)


if "store" not in st.session_state:
    backend = BackendClient(BACKEND_URL, user_id=AVALUOS_USER_ID or None)
    queries = QueryClient(refetch_interval=REFRESH_SECONDS)
    queries.subscribe(DOCUMENTOS_KEY, _on_documentos_invalidated)
    st.session_state.backend = backend
    st.session_state.queries = queries
    st.session_state.store = DocumentosStore(backend, queries)

backend: BackendClient = st.session_state.backend
queries: QueryClient = st.session_state.queries
store: DocumentosStore = st.session_state.store

for aviso in st.session_state.pop("avisos", []):
    st.toast(aviso)


# ----------------------------
# 🧭 Sidebar
# ----------------------------
with st.sidebar:
    st.markdown("## 📁 Documentos de avalúos")
    st.markdown("---")

    user_id = st.text_input("Usuario", value=backend.user_id or "")
    backend.user_id = user_id.strip() or None

    st.markdown("---")
    st.subheader("Backend health")

    if st.button("Probar conexión"):
        try:
            data = backend.health()
            if data.get("status") == "ok":
                st.success("Backend OK ✅")
            else:
                st.warning(f"Backend {data.get('status')} ⚠️")
            st.json(data)
        except Exception as e:
            logger.warning(f"Health del backend falló: {e}")
            st.error(f"❌ No se pudo conectar con backend: {e}")


# ----------------------------
# 🔎 Filtros
# ----------------------------
def _reset_filters():
    store.reset_filters()
    st.session_state.f_direccion = ""
    st.session_state.f_folio_shit = ""


with st.expander("Filtros", expanded=True):
    col_dir, col_folio = st.columns(2)
    with col_dir:
        st.text_input("Filtrar por Dirección", key="f_direccion")
    with col_folio:
        st.text_input("Filtrar por Folio SHIT", key="f_folio_shit")

    c1, c2, c3, c4, c5 = st.columns([1, 1, 1, 1, 2])
    with c1:
        st.checkbox("En proceso", value=store.filters.show_en_proceso, key="f_en_proceso")
    with c2:
        st.checkbox("Cerrado", value=store.filters.show_cerrado, key="f_cerrado")
    with c3:
        st.checkbox("Cancelado", value=store.filters.show_cancelado, key="f_cancelado")
    with c4:
        st.checkbox("Enviado", value=store.filters.show_enviado, key="f_enviado")
    with c5:
        st.button("Limpiar filtros", on_click=_reset_filters)

store.set_direccion_filter(st.session_state.f_direccion)
store.set_folio_shit_filter(st.session_state.f_folio_shit)
store.set_show_en_proceso(st.session_state.f_en_proceso)
store.set_show_cerrado(st.session_state.f_cerrado)
store.set_show_cancelado(st.session_state.f_cancelado)
store.set_show_enviado(st.session_state.f_enviado)


# ----------------------------
# ⬆️ Diálogo de subida
# ----------------------------
def _on_dialog_dismissed():
    # Cerrar con la X o Esc descarta la subida igual que "Cancelar"
    store.close_modal()


@st.dialog("Subir documento", on_dismiss=_on_dialog_dismissed)
def upload_dialog():
    avaluo = store.selected_avaluo or {}
    header = HEADERS.get(store.selected_document_type, store.selected_document_type)
    st.markdown(
        f"**{header}** · Folio SHIT `{avaluo.get('folio_shit') or '-'}`  \n"
        f"{avaluo.get('direccion') or ''}"
    )

    upl = st.file_uploader(
        f"Archivo (PDF, Word, JPG o PNG, máx. {size_label(MAX_FILE_SIZE)})",
        type=["pdf", "doc", "docx", "jpg", "jpeg", "png"],
        key="upl_documento",
    )

    col_ok, col_cancel = st.columns(2)
    with col_ok:
        if st.button("Subir", type="primary", disabled=upl is None or store.is_uploading):
            with st.spinner("Subiendo documento... ⏳"):
                ok = store.upload_document(upl)
            if ok:
                st.rerun()
    with col_cancel:
        if st.button("Cancelar"):
            store.close_modal()
            st.rerun()

    if store.upload_error:
        st.error(store.upload_error)


# ----------------------------
# 📋 Tabla de avalúos
# ----------------------------
def _fetch_documentos():
    return backend.query_avaluos(**store.filters.as_params())


GRID_COLUMN_CONFIG = {
    header: st.column_config.LinkColumn(header, display_text=LINK_DISPLAY_PATTERN)
    if kind == "link"
    else st.column_config.TextColumn(header)
    for _, header, kind in COLUMNS
}


@st.fragment(run_every=REFRESH_SECONDS)
def documentos_grid():
    result = queries.get(store.filters.query_key(), _fetch_documentos)
    documentos = result.data or []

    if result.is_error:
        st.warning(f"⚠️ No se pudieron actualizar los avalúos: {result.error}")

    if not documentos:
        st.info("No hay avalúos con estos filtros.")
        return

    col_size, col_page, col_total = st.columns([1, 1, 4])
    with col_size:
        page_size = st.selectbox(
            "Filas por página",
            PAGE_SIZE_OPTIONS,
            index=PAGE_SIZE_OPTIONS.index(DEFAULT_PAGE_SIZE),
            key="page_size",
        )
    pages = page_count(len(documentos), page_size)
    if st.session_state.get("page", 1) > pages:
        st.session_state.page = pages
    with col_page:
        page = st.number_input("Página", min_value=1, max_value=pages, step=1, key="page")
    with col_total:
        st.caption(f"{len(documentos)} avalúos · página {page} de {pages}")

    # Solo se firman los enlaces de la página visible
    visibles = paginate(documentos, int(page), page_size)
    df_page = rows_to_dataframe(build_rows(visibles, store.get_signed_url))
    st.dataframe(df_page, width="stretch", hide_index=True, column_config=GRID_COLUMN_CONFIG)

    df = avaluos_to_dataframe(documentos)
    st.download_button(
        "⬇️ Descargar listado en CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="avaluos.csv",
        mime="text/csv",
        key="csv_avaluos",
    )

    st.markdown("#### Subir documento")
    labels = {
        f"#{d['id']} · {d.get('folio_shit') or d.get('folio') or '-'} · {d.get('direccion') or ''}": d
        for d in documentos
    }
    col_avaluo, col_doc, col_btn = st.columns([3, 2, 1])
    with col_avaluo:
        label = st.selectbox("Avalúo", list(labels.keys()), key="sel_avaluo")
    with col_doc:
        field = st.selectbox(
            "Documento",
            DOCUMENT_FIELDS,
            format_func=lambda f: HEADERS[f],
            key="sel_documento",
        )
    with col_btn:
        st.markdown("&nbsp;")
        if st.button("⬆️ Subir", key="btn_abrir_subida"):
            store.open_modal(labels[label], field)
            st.rerun()


st.markdown("## 📁 Documentos")
documentos_grid()

if store.is_modal_open:
    upload_dialog()
