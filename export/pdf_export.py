"""PDF summary of a calculation snapshot."""
from __future__ import annotations
import io
from xml.sax.saxutils import escape
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from homebudget.presets import DISCLAIMER
from homebudget.rules import has_blocking
from homebudget.snapshot import CalculationSnapshot

GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _fmt(v) -> str:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return str(v)
    return f"${v:,.0f}" if abs(v) >= 100 else f"{v:,.2f}"


def build_summary_pdf(
    snapshot: CalculationSnapshot,
    title: str = "Home Purchase Summary",
    override_reason: Optional[str] = None,
) -> bytes:
    """Render the snapshot to PDF bytes.

    When critical advisories are present an ``override_reason`` is required
    and printed with the advisories.
    """

    if has_blocking(snapshot.warnings) and not override_reason:
        raise ValueError("override_reason required when critical warnings exist")

    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(f"<b>{escape(title)}</b>", styles["Title"]), Spacer(1, 12)]

    rows = [[k, _fmt(v)] for k, v in snapshot.summary().items()]
    t = Table([["Deal Snapshot", ""]] + rows, hAlign="LEFT", colWidths=[200, 320])
    t.setStyle(GRID)
    story += [t, Spacer(1, 12)]

    fin_rows = [["Source", "Amount", "Monthly", "Status"]] + [
        [r.name, _fmt(r.amount), _fmt(r.monthly_payment or r.deferred_monthly_repayment), r.status]
        for r in snapshot.allocation.results
    ]
    if len(fin_rows) > 1:
        t = Table(fin_rows, hAlign="LEFT")
        t.setStyle(GRID)
        story += [Paragraph("<b>Financing Sources</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    people = snapshot.affordability["per_person"]
    if people:
        p_rows = [["Member", "Income", "GDS %", "GDS", "TDS %", "TDS"]] + [
            [p["name"], _fmt(p["income"]), f"{p['gds_percent']:.1f}", p["gds_status"], f"{p['tds_percent']:.1f}", p["tds_status"]]
            for p in people
        ]
        t = Table(p_rows, hAlign="LEFT")
        t.setStyle(GRID)
        story += [Paragraph("<b>Debt Service Ratios</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    if snapshot.warnings:
        w_rows = [["Code", "Severity", "Source", "Message"]] + [
            [w.code, w.severity, w.source_label, Paragraph(escape(w.message), styles["Normal"])] for w in snapshot.warnings
        ]
        t = Table(w_rows, hAlign="LEFT", colWidths=[110, 55, 85, 290])
        t.setStyle(GRID)
        story += [Paragraph("<b>Warnings</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]
    if override_reason:
        story.append(Paragraph(f"Override Reason: {escape(override_reason)}", styles["Normal"]))

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()
