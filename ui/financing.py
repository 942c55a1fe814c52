import streamlit as st

from homebudget.models import FinancingSource, capabilities_for
from homebudget.presets import FINANCING_TYPES
from ui.forms import number_field, wkey

TYPE_KEYS = list(FINANCING_TYPES.keys())


def _type_label(t: str) -> str:
    return FINANCING_TYPES[t]["label"]


def _add_source() -> None:
    source_type = st.session_state.get(wkey("new_source_type"), "other_savings")
    st.session_state["financing_sources"].add(FinancingSource.create(source_type))


def render_financing_sources():
    """Financing source cards; amounts for auto slots are filled in by the engine."""
    slots = st.session_state["financing_sources"]
    with st.expander("Financing Sources", expanded=True):
        for sid, src in list(slots.items()):
            caps = src.capabilities
            st.markdown(f"**{src.name or caps.label}** · {caps.label}")
            c1, c2 = st.columns(2)
            name = c1.text_input("Name", value=src.name, key=wkey("fin_name", sid))
            source_type = c2.selectbox(
                "Type",
                TYPE_KEYS,
                index=TYPE_KEYS.index(src.source_type),
                format_func=_type_label,
                key=wkey("fin_type", sid),
            )
            new_caps = capabilities_for(source_type)
            st.caption(new_caps.description)
            update = {"name": name, "source_type": source_type}
            if source_type != src.source_type:
                update["is_auto_calculated"] = new_caps.is_auto_calculated
                update["is_auto_fill_mortgage"] = src.is_auto_fill_mortgage and source_type == "mortgage"
            src = src.model_copy(update=update)

            if src.is_auto_fill_mortgage:
                st.caption("Amount auto-filled from the total mortgage (including CMHC).")
            elif src.is_gap_slot:
                st.caption("Amount auto-calculated to cover the down payment gap.")
            else:
                amount = number_field(st, "Amount", wkey("fin_amount", sid), src.amount, min_value=0.0, step=1000.0)
                src = src.model_copy(update={"amount": amount})

            if new_caps.is_loan:
                l1, l2 = st.columns(2)
                rate = number_field(l1, "Rate %", wkey("fin_rate", sid), src.rate, min_value=0.0, step=0.05)
                years = number_field(
                    l2, "Term (years)", wkey("fin_term", sid), src.term_months / 12, min_value=0.0, step=1.0
                )
                src = src.model_copy(update={"rate": rate, "term_months": int(round(years * 12))})

            slots.replace(sid, src)
            st.button("Remove", key=wkey("fin_remove", sid), on_click=slots.remove, args=(sid,))
            st.divider()

        c1, c2 = st.columns([2, 1])
        c1.selectbox(
            "New source type",
            TYPE_KEYS,
            index=TYPE_KEYS.index("other_savings"),
            format_func=_type_label,
            key=wkey("new_source_type"),
        )
        c2.button("Add Financing Source", key=wkey("add_source"), on_click=_add_source)
