import io

import pandas as pd
import streamlit as st

from export.pdf_export import build_summary_pdf
from homebudget import state
from homebudget.presets import DISCLAIMER
from homebudget.rules import has_blocking


def _summary_csv(snapshot) -> bytes:
    buf = io.StringIO()
    pd.DataFrame([snapshot.summary()]).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def render_bottombar(inputs, snapshot):
    """Export row: JSON state, CSV summary and the PDF report."""
    st.divider()
    st.write("**Disclaimer**")
    st.caption(DISCLAIMER)
    c1, c2, c3 = st.columns([2, 1, 1])
    c2.download_button(
        "Export JSON",
        data=state.export_state(inputs),
        file_name="home-budget.json",
        mime="application/json",
        key="export_json",
    )
    c2.download_button(
        "Download CSV Summary",
        data=_summary_csv(snapshot),
        file_name="home-budget-summary.csv",
        mime="text/csv",
        key="export_csv",
    )

    reason = ""
    if has_blocking(snapshot.warnings):
        st.error("Critical warnings present. Provide an override reason to enable PDF export.")
        reason = c1.text_input("Override reason (will be embedded in PDF)", key="override_reason")
    if has_blocking(snapshot.warnings) and not reason.strip():
        c3.button("Download PDF", disabled=True, key="export_pdf_disabled")
        return
    c3.download_button(
        "Download PDF",
        data=build_summary_pdf(snapshot, override_reason=reason or None),
        file_name="home-budget-summary.pdf",
        mime="application/pdf",
        key="export_pdf",
    )
