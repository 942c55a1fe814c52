"""Session-state plumbing shared by the input panels."""
import streamlit as st

from homebudget import state
from homebudget.models import CalculatorInputs, FinancingSource, HouseholdMember
from homebudget.slots import SlotList

LIST_KEYS = ("financing_sources", "household_members", "renovation_items")


def default_inputs() -> CalculatorInputs:
    """Starting point for a new session: the usual Quebec financing mix."""
    return CalculatorInputs(
        financing_sources=[
            FinancingSource.create("mortgage", is_auto_fill_mortgage=True),
            FinancingSource.create("celiapp"),
            FinancingSource.create("rrsp", name="RRSP"),
            FinancingSource.create("tfsa"),
            FinancingSource.create("joint_account"),
            FinancingSource.create("parents_loan"),
        ],
        household_members=[HouseholdMember(name="Person 1")],
    )


def apply_inputs(inputs: CalculatorInputs) -> None:
    """Replace the whole form with ``inputs``.

    Widget keys carry a generation number so widgets from the previous form
    do not leak their values into the new one.
    """
    st.session_state["inputs"] = inputs.model_copy(update={k: [] for k in LIST_KEYS})
    for key in LIST_KEYS:
        st.session_state[key] = SlotList.from_items(getattr(inputs, key))
    st.session_state["form_gen"] = st.session_state.get("form_gen", 0) + 1


def init_session() -> None:
    if "inputs" in st.session_state:
        return
    apply_inputs(state.load_state() or default_inputs())


def current_inputs() -> CalculatorInputs:
    base = st.session_state["inputs"]
    return base.model_copy(update={k: st.session_state[k].as_list() for k in LIST_KEYS})


def update_inputs(**fields) -> None:
    st.session_state["inputs"] = st.session_state["inputs"].model_copy(update=fields)


def wkey(name: str, slot_id=None) -> str:
    gen = st.session_state.get("form_gen", 0)
    if slot_id is None:
        return f"{name}_{gen}"
    return f"{name}_{slot_id}_{gen}"


def number_field(container, label: str, key: str, default: float, **kwargs) -> float:
    """``number_input`` that only passes a default before the widget exists."""
    if key in st.session_state:
        return float(container.number_input(label, key=key, **kwargs))
    return float(container.number_input(label, value=float(default), key=key, **kwargs))
