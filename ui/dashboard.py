from dataclasses import asdict

import pandas as pd
import streamlit as st

from homebudget.formulas import FORMULAS
from homebudget.presets import FINANCING_TYPES
from homebudget.snapshot import CalculationSnapshot


def render_warnings(warnings):
    for r in warnings:
        label = f"[{r.code}] {r.source_label}: {r.message}" if r.source_label else f"[{r.code}] {r.message}"
        if r.severity == "critical":
            st.error(label)
        elif r.severity == "warn":
            st.warning(label)
        else:
            st.info(label)


def _financing_table(snapshot: CalculationSnapshot) -> pd.DataFrame:
    rows = []
    for res in snapshot.allocation.results:
        row = asdict(res)
        row["source_type"] = FINANCING_TYPES[res.source_type]["label"]
        rows.append(row)
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    return df.drop(columns=["index"]).rename(
        columns={
            "name": "Source",
            "source_type": "Type",
            "amount": "Amount",
            "monthly_payment": "Monthly",
            "interest_portion": "Interest",
            "principal_portion": "Principal",
            "deferred_monthly_repayment": "Deferred Repayment",
            "status": "Status",
        }
    )


def _per_person_table(per_person) -> pd.DataFrame:
    df = pd.DataFrame(per_person)
    if df.empty:
        return df
    df["income_share"] = df["income_share"] * 100
    return df.rename(
        columns={
            "name": "Person",
            "income": "Income",
            "income_share": "Share %",
            "housing_cost_share": "Housing Share",
            "total_debts": "Debts",
            "deferred_repayment_share": "RRSP Repayment",
            "tds_amount": "TDS Amount",
            "gds_percent": "GDS %",
            "gds_status": "GDS",
            "tds_percent": "TDS %",
            "tds_status": "TDS",
        }
    )


def render_dashboard(snapshot: CalculationSnapshot):
    """Render metrics, advisories, tables and charts for one snapshot."""
    st.header("Dashboard")
    summary = snapshot.summary()
    household = snapshot.affordability["household"]
    cols = st.columns(4)
    cols[0].metric("Total Mortgage", f"${summary['Total Mortgage']:,.0f}")
    cols[1].metric("Total Cash Needed", f"${summary['Total Cash Needed']:,.0f}")
    cols[2].metric("Total Monthly Costs", f"${summary['Total Monthly Costs']:,.0f}")
    cols[3].metric("Housing Cost Ratio", f"{household['percent']:.1f}%", delta=household["status"], delta_color="off")

    render_warnings(snapshot.warnings)

    ins = snapshot.insurance
    with st.expander("CMHC Insurance & Welcome Tax"):
        c1, c2 = st.columns(2)
        if ins["insurance_required"]:
            c1.write(f"LTV: {ins['ltv'] * 100:.2f}%")
            c1.write(f"Premium rate: {ins['premium_rate'] * 100:.2f}%")
            c1.write(f"Premium: ${ins['premium']:,.2f}")
            c1.write(f"Provincial tax on premium: ${ins['provincial_tax_on_premium']:,.2f}")
            c1.write(f"Total insurance cost: ${ins['total_insurance_cost']:,.2f}")
        else:
            c1.write("CMHC insurance not required (20% or more down).")
        c1.write(f"Total financed: ${ins['total_financed_amount']:,.2f}")
        breakdown = pd.DataFrame(snapshot.welcome_tax["breakdown"])
        if not breakdown.empty:
            c2.dataframe(breakdown, use_container_width=True, hide_index=True)
        c2.write(f"Welcome tax: ${snapshot.welcome_tax['total_tax']:,.2f}")

    st.subheader("Financing")
    alloc = snapshot.allocation
    c1, c2, c3 = st.columns(3)
    c1.metric("Savings for Down Payment", f"${alloc.total_savings_for_down_payment:,.0f}")
    c2.metric("Gap", f"${alloc.gap_amount:,.0f}")
    c3.metric("Monthly Loan Payments", f"${alloc.total_monthly_loan_payment:,.0f}")
    table = _financing_table(snapshot)
    if not table.empty:
        st.dataframe(table, use_container_width=True, hide_index=True)

    st.subheader("Affordability")
    per_person = _per_person_table(snapshot.affordability["per_person"])
    if per_person.empty:
        st.caption("Enter household income to see GDS/TDS ratios.")
    else:
        st.dataframe(per_person, use_container_width=True, hide_index=True)

    if snapshot.payment_breakdown is not None and not snapshot.payment_breakdown.empty:
        st.subheader("Monthly Payment Breakdown")
        st.bar_chart(snapshot.payment_breakdown)
    if snapshot.equity is not None and not snapshot.equity.empty:
        st.subheader("Equity Over Time")
        st.line_chart(snapshot.equity)

    with st.expander("Formulas"):
        for group in FORMULAS:
            st.markdown(f"**{group['category']}**")
            st.dataframe(
                pd.DataFrame(group["items"], columns=["Name", "Formula", "Description"]),
                use_container_width=True,
                hide_index=True,
            )
