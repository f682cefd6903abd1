"""Streamlit entry point for the transactions dashboard."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

import pandas as pd
import streamlit as st
from dashboard import auth, export, insights, normalize, utils, view, viz
from dashboard.config import Settings, load_settings
from dashboard.logging_setup import configure_logging, get_logger

logger = get_logger("dashboard.app")

SESSION_KEY = "session_store"
ROWS_KEY = "transaction_rows"
PAGE_KEY = "page_state"
FILTER_SIGNATURE_KEY = "filter_signature"
GLOBAL_FILTER_KEY = "global_filter"
COLUMN_FILTER_PREFIX = "column_filter__"
PDF_KEY = "pdf_report"

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

STYLE = """
<style>
:root {
    --primary-500: #2563eb;
    --slate-900: #0f172a;
    --slate-500: #64748b;
}

[data-testid="stAppViewContainer"] {
    background: radial-gradient(circle at 15% 20%, rgba(37, 99, 235, 0.06), transparent 32%),
                radial-gradient(circle at 85% 15%, rgba(147, 51, 234, 0.05), transparent 35%),
                #f5f7fb;
    color: var(--slate-900);
}

[data-testid="stHeader"] {
    background: transparent;
}

h1 {
    font-size: 2.4rem;
    font-weight: 700;
    color: var(--slate-900);
}

.report-card__label {
    font-size: 0.85rem;
    font-weight: 600;
    text-transform: uppercase;
    letter-spacing: 0.08em;
    color: var(--slate-500);
    margin-bottom: 0.4rem;
}

.stDataFrame {
    border-radius: 18px;
    border: 1px solid rgba(226, 232, 240, 0.9);
    overflow: hidden;
}
</style>
"""


def _session_store() -> auth.SessionStore:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = auth.SessionStore()
    return st.session_state[SESSION_KEY]


def _reset_view_state() -> None:
    for key in list(st.session_state.keys()):
        if key in (ROWS_KEY, PAGE_KEY, FILTER_SIGNATURE_KEY, GLOBAL_FILTER_KEY, PDF_KEY) or str(key).startswith(
            COLUMN_FILTER_PREFIX
        ):
            del st.session_state[key]


def _transaction_rows(
    store: auth.SessionStore,
    settings: Settings,
    state: MutableMapping[str, Any] | None = None,
) -> pd.DataFrame:
    state = st.session_state if state is None else state
    if ROWS_KEY not in state:
        state[ROWS_KEY] = normalize.normalize_payload(store.payload, settings.timezone)
        state.pop(PDF_KEY, None)
    return state[ROWS_KEY]


def _sync_filters(
    filters: view.FilterState,
    settings: Settings,
    state: MutableMapping[str, Any] | None = None,
) -> bool:
    """Reset paging and drop the built PDF when the filters changed."""

    state = st.session_state if state is None else state
    signature = (filters.global_filter, tuple(sorted(filters.column_filters.items())))
    if state.get(FILTER_SIGNATURE_KEY) == signature:
        return False
    state[FILTER_SIGNATURE_KEY] = signature
    state[PAGE_KEY] = view.PageState(size=settings.page_size)
    state.pop(PDF_KEY, None)
    return True


def _page_state(settings: Settings) -> view.PageState:
    if PAGE_KEY not in st.session_state:
        st.session_state[PAGE_KEY] = view.PageState(size=settings.page_size)
    return st.session_state[PAGE_KEY]


def _go_previous() -> None:
    st.session_state[PAGE_KEY] = st.session_state[PAGE_KEY].previous()


def _go_next(total: int) -> None:
    st.session_state[PAGE_KEY] = st.session_state[PAGE_KEY].next(total)


def _logout(store: auth.SessionStore) -> None:
    auth.logout(store)
    _reset_view_state()


def render_login(store: auth.SessionStore, settings: Settings) -> None:
    """Credential form; a successful login replaces any previous session data."""

    _, centre, _ = st.columns([1, 1.2, 1])
    with centre:
        st.title("Masuk")
        with st.form("login_form"):
            username = st.text_input("Username", placeholder="Masukkan Username")
            password = st.text_input("Password", type="password", placeholder="Masukkan Password")
            submitted = st.form_submit_button("Masuk", use_container_width=True)

        if not submitted:
            return

        try:
            with st.spinner("Sedang masuk..."):
                auth.login(store, username, password, settings=settings)
        except (auth.CredentialsError, auth.LoginError) as exc:
            st.error(str(exc))
            return

    _reset_view_state()
    st.rerun()


def _render_detail(page_rows: pd.DataFrame) -> None:
    if page_rows.empty:
        return

    records = page_rows.to_dict("records")
    choice = st.selectbox(
        "Detail Transaksi",
        range(len(records)),
        index=None,
        format_func=lambda i: f"{records[i]['id']} · {records[i]['product_name']}",
        placeholder="Pilih transaksi untuk melihat detail",
    )
    if choice is None:
        return

    detail = pd.DataFrame(insights.detail_fields(records[choice]), columns=["Field", "Value"])
    st.table(detail.set_index("Field"))


def _render_pdf_export(regions: dict[str, object], settings: Settings) -> None:
    if st.sidebar.button("Siapkan PDF", use_container_width=True):
        try:
            with st.spinner("Menyiapkan laporan PDF..."):
                st.session_state[PDF_KEY] = export.build_pdf_report(regions)
        except export.ExportError as exc:
            logger.exception("PDF export failed")
            st.sidebar.error(str(exc))
            st.session_state.pop(PDF_KEY, None)
        else:
            if st.session_state[PDF_KEY] is None:
                st.sidebar.warning("Grafik laporan tidak ditemukan.")

    pdf_bytes = st.session_state.get(PDF_KEY)
    if pdf_bytes:
        st.sidebar.download_button(
            "Unduh PDF",
            data=pdf_bytes,
            file_name=settings.pdf_filename,
            mime="application/pdf",
            use_container_width=True,
        )


def render_dashboard(store: auth.SessionStore, settings: Settings) -> None:
    """Transactions table, charts and exports for the logged-in session."""

    rows = _transaction_rows(store, settings)

    sidebar = st.sidebar
    sidebar.header("Sesi")
    sidebar.caption(f"{len(rows):,} transaksi dimuat".replace(",", "."))
    sidebar.button("Keluar", on_click=_logout, args=(store,), use_container_width=True)

    st.title("Data Transaksi")

    global_filter = st.text_input(
        "Cari transaksi",
        key=GLOBAL_FILTER_KEY,
        placeholder="Cari transaksi..",
        label_visibility="collapsed",
    )

    filter_cols = st.columns(len(view.VISIBLE_COLUMNS))
    column_filters: dict[str, str] = {}
    for col, (column, label) in zip(filter_cols, view.VISIBLE_COLUMNS.items()):
        column_filters[column] = col.text_input(
            label,
            key=f"{COLUMN_FILTER_PREFIX}{column}",
            placeholder=f"Cari {label}",
        )

    filters = view.FilterState(global_filter, column_filters)
    filtered = filters.apply(rows)

    _sync_filters(filters, settings)

    page = _page_state(settings).clamp(len(filtered))
    st.session_state[PAGE_KEY] = page
    page_rows = page.slice(filtered)

    table = page_rows[list(view.VISIBLE_COLUMNS)].rename(columns=view.VISIBLE_COLUMNS)
    table["Jumlah"] = table["Jumlah"].map(utils.format_currency)
    if table.empty:
        st.caption("Tidak ada transaksi yang cocok dengan filter.")
    else:
        st.dataframe(table, hide_index=True, use_container_width=True)

    nav_prev, nav_info, nav_next = st.columns([1, 2, 1])
    nav_prev.button(
        "Sebelumnya",
        on_click=_go_previous,
        disabled=not page.has_previous,
        use_container_width=True,
    )
    nav_info.caption(
        f"Halaman {page.index + 1} dari {view.page_count(len(filtered), page.size)} · {len(filtered)} transaksi"
    )
    nav_next.button(
        "Berikutnya",
        on_click=_go_next,
        args=(len(filtered),),
        disabled=not page.has_next(len(filtered)),
        use_container_width=True,
    )

    _render_detail(page_rows)

    categories = insights.count_by_category(filtered)
    pie_fig = viz.plot_payment_method_pie(categories)
    bar_fig = viz.plot_amount_bars(insights.amount_series(filtered))

    with st.container():
        st.markdown('<div class="report-card__label">Distribusi Transaksi - Pie Chart</div>', unsafe_allow_html=True)
        st.plotly_chart(pie_fig, use_container_width=True, config={"displayModeBar": False})

    with st.container():
        st.markdown('<div class="report-card__label">Tren Penjualan - Bar Chart</div>', unsafe_allow_html=True)
        st.plotly_chart(bar_fig, use_container_width=True, config={"displayModeBar": False})

    sidebar.subheader("Ekspor")
    only_filtered = sidebar.toggle(
        "Hanya data terfilter",
        value=False,
        help="Secara bawaan seluruh transaksi diekspor, terlepas dari filter dan halaman.",
    )
    export_rows = filtered if only_filtered else rows
    sidebar.download_button(
        "Unduh Excel",
        data=export.build_excel_report(export_rows),
        file_name=settings.excel_filename,
        mime=EXCEL_MIME,
        disabled=export_rows.empty,
        use_container_width=True,
    )
    _render_pdf_export({"report1": pie_fig, "report2": bar_fig}, settings)


def main() -> None:
    """Render the login screen or the dashboard for the current session."""

    st.set_page_config(
        page_title="Data Transaksi",
        page_icon="💳",
        layout="wide",
    )

    settings = load_settings()
    configure_logging(settings.log_level)
    st.markdown(STYLE, unsafe_allow_html=True)

    store = _session_store()
    if not store.is_authenticated:
        render_login(store, settings)
    else:
        render_dashboard(store, settings)


if __name__ == "__main__":
    main()
