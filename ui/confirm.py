"""Confirmation page: review table, exports and the final submission."""
from __future__ import annotations

import streamlit as st

from core.controller import ConfirmController
from core.flows import Flow
from core.steps import StepDefinition
from core.summary import review_rows, summary_csv, summary_frame
from export.pdf_export import build_summary_pdf
from ui.components import get_navigator, get_store, render_step_indicator, session_translator


def render_confirm_page(step: StepDefinition, flow: Flow):
    tr = session_translator()
    ctl = ConfirmController(step, get_store(), get_navigator())
    draft = ctl.draft
    st.header(tr(f"{step.namespace}.title"))
    render_step_indicator(step, tr)
    st.caption(tr(f"{step.namespace}.description"))

    df = summary_frame(flow.steps, draft, tr)
    st.dataframe(df, hide_index=True)

    st.subheader(tr("confirm.documents"))
    checklist = []
    for item in ctl.checklist():
        status = tr("common.uploaded") if item.uploaded else tr("common.notUploaded")
        label = tr(item.slot.label)
        detail = f" ({item.file_name})" if item.uploaded else ""
        st.markdown(f"{'✅' if item.uploaded else '⬜'} **{label}**: {status}{detail}")
        checklist.append([label, status])

    missing = ctl.missing()
    if missing:
        sep = tr("common.listSeparator")
        st.warning(tr("confirm.missingFiles", files=sep.join(tr(slot.label) for slot in missing)))

    c1, c2 = st.columns(2)
    c1.download_button(
        tr("confirm.downloadCsv"),
        data=summary_csv(df),
        file_name=f"{flow.name}_application.csv",
        mime="text/csv",
        key="download_csv",
    )
    headers = {
        "field": tr("confirm.columns.field"),
        "value": tr("confirm.columns.value"),
        "documents": tr("confirm.documents"),
        "document": tr("confirm.document"),
        "status": tr("confirm.status"),
    }
    c2.download_button(
        tr("confirm.downloadPdf"),
        data=build_summary_pdf(
            tr(f"{step.namespace}.title"),
            review_rows(flow.steps, draft, tr),
            checklist,
            headers,
            lang=tr.lang,
            note=tr("confirm.pdfNote"),
        ),
        file_name=f"{flow.name}_application.pdf",
        mime="application/pdf",
        key="download_pdf",
    )

    back_col, submit_col = st.columns(2)
    if back_col.button(tr("common.back"), key="confirm_back"):
        ctl.back()
        st.rerun()
    if submit_col.button(tr("common.submit"), key="confirm_submit", type="primary", disabled=not ctl.can_submit()):
        with st.spinner(tr("common.submitting")):
            ctl.submit()
        st.rerun()
