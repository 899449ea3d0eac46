"""
FinExtract - Streamlit page

Upload receipts, invoices and statements, watch each one move through
extraction, and review the totals, category mix and CSV export.
"""
from __future__ import annotations

import time

import streamlit as st

from finextract.aggregation.stats import format_amount
from finextract.config.settings import Settings
from finextract.export.csv_exporter import EXPORT_FILENAME, EXPORT_MEDIA_TYPE
from finextract.logging.logger import Log
from finextract.registry.models import DocumentEntry
from finextract.session import ExtractionSession, build_session
from finextract.ui.components import (
    breakdown_frame,
    documents_frame,
    processed_ratio,
    status_label,
)
from finextract.ui.upload import ACCEPTED_EXTENSIONS, accepted_sources

st.set_page_config(
    page_title="FinExtract AI",
    page_icon="🧾",
    layout="wide",
)


# =============================================================================
# Session
# =============================================================================


@st.cache_resource
def get_settings() -> Settings:
    settings = Settings()
    Log.configure(settings.log_level)
    return settings


def get_session() -> ExtractionSession:
    """Get or create this browser session's ExtractionSession."""
    if "session" not in st.session_state:
        try:
            st.session_state.session = build_session(get_settings())
        except ValueError as exc:
            st.error(f"Extraction is not configured: {exc}")
            st.stop()
    return st.session_state.session


def ingest_uploads(session: ExtractionSession) -> None:
    uploaded_files = st.file_uploader(
        "Drag & drop files here, or click to browse.",
        type=ACCEPTED_EXTENSIONS,
        accept_multiple_files=True,
        help="Supports PDF, JPG, PNG",
        key=f"uploader_{st.session_state.uploader_key}",
    )
    if not uploaded_files:
        return
    session.add_files(accepted_sources(uploaded_files))
    # A fresh key empties the uploader so the same files are not added twice
    st.session_state.uploader_key += 1
    st.rerun()


# =============================================================================
# Sections
# =============================================================================


def render_header(session: ExtractionSession) -> None:
    title_col, export_col = st.columns([4, 1])
    with title_col:
        st.title("Financial Document Extraction")
        st.caption(
            "Automatically extract data from receipts, invoices, and bank statements."
        )
    with export_col:
        st.download_button(
            "⬇️ Export CSV",
            data=session.export_csv(),
            file_name=EXPORT_FILENAME,
            mime=EXPORT_MEDIA_TYPE,
            disabled=not session.has_successful(),
            use_container_width=True,
        )


def render_dashboard(session: ExtractionSession) -> None:
    stats = session.stats()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Documents", f"{stats.total_successful} processed")
        st.progress(processed_ratio(stats))
    with col2:
        st.metric("Total Value Extracted", format_amount(stats.total_amount))
        st.caption("Across all currencies (not converted)")
    with col3:
        st.markdown("**Category Distribution**")
        if stats.category_breakdown:
            st.bar_chart(breakdown_frame(stats), use_container_width=True)
        else:
            st.caption("No data to display")


def render_row(session: ExtractionSession, entry: DocumentEntry) -> None:
    preview_col, info_col, status_col, action_col = st.columns([1, 5, 2, 1])
    with preview_col:
        preview = session.registry.previews.get(entry.preview) if entry.preview else None
        if preview:
            st.image(preview, width=48)
        else:
            st.markdown("📄")
    with info_col:
        st.markdown(f"**{entry.source.name}**")
        if entry.data:
            st.caption(
                f"{entry.data.transaction_date} · {entry.data.vendor_name} · "
                f"{entry.data.category.value} · "
                f"{entry.data.currency_code} {format_amount(entry.data.amount)}"
            )
    with status_col:
        st.markdown(status_label(entry.status))
    with action_col:
        if st.button("🗑️", key=f"remove_{entry.id}", help="Remove document"):
            session.remove(entry.id)
            st.rerun()


def render_documents(session: ExtractionSession) -> None:
    entries = session.entries()
    st.subheader("Recent Extractions")
    st.caption(f"{len(entries)} documents")
    if not entries:
        st.info("No documents uploaded yet.")
        return
    for entry in entries:
        render_row(session, entry)
    with st.expander("Table view"):
        st.dataframe(documents_frame(entries), hide_index=True, use_container_width=True)


# =============================================================================
# Page
# =============================================================================

if "uploader_key" not in st.session_state:
    st.session_state.uploader_key = 0

session = get_session()
render_header(session)
render_dashboard(session)
st.divider()

upload_col, list_col = st.columns([1, 3])
with upload_col:
    st.subheader("Upload Documents")
    ingest_uploads(session)
with list_col:
    render_documents(session)

if session.has_pending():
    time.sleep(get_settings().ui_refresh_seconds)
    st.rerun()
