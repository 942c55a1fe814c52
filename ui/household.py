import streamlit as st

from homebudget.models import HouseholdMember
from ui.forms import number_field, wkey

DEBT_FIELDS = [
    ("car_loan_payment", "Car Loan"),
    ("student_loan_payment", "Student Loan"),
    ("personal_loan_payment", "Personal Loan"),
    ("credit_card_payment", "Credit Card (min.)"),
]


def _add_member() -> None:
    slots = st.session_state["household_members"]
    slots.add(HouseholdMember(name=f"Person {len(slots) + 1}"))


def render_household():
    """Household members with monthly income and personal debt payments."""
    slots = st.session_state["household_members"]
    with st.expander("Household", expanded=True):
        for sid, member in list(slots.items()):
            c1, c2 = st.columns(2)
            name = c1.text_input("Name", value=member.name, key=wkey("owner_name", sid))
            income = number_field(
                c2, "Gross Monthly Income", wkey("owner_income", sid), member.income, min_value=0.0, step=100.0
            )
            debts = {}
            cols = st.columns(len(DEBT_FIELDS))
            for col, (field, label) in zip(cols, DEBT_FIELDS):
                debts[field] = number_field(
                    col, label, wkey(f"owner_{field}", sid), getattr(member, field), min_value=0.0
                )
            member = HouseholdMember(name=name, income=income, **debts)
            slots.replace(sid, member)
            st.caption(f"Debts: ${member.total_debts:,.0f}/mo")
            # the household always keeps at least one member
            st.button(
                "Remove",
                key=wkey("owner_remove", sid),
                on_click=slots.remove,
                args=(sid,),
                disabled=len(slots) <= 1,
            )
        st.button("Add Person", key=wkey("add_owner"), on_click=_add_member)
        total_income = sum(m.income for m in slots)
        st.caption(f"Total household income: ${total_income:,.0f}/mo")
