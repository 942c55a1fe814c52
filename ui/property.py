import streamlit as st

from homebudget.calculators import insurance_calculation, offer_percentages
from ui.forms import number_field, update_inputs, wkey

MODE_LABELS = {"amount": "Amount ($)", "percent": "Percent (%)"}


def _convert_down_payment(offer_price: float) -> None:
    """Keep the entered down payment equivalent when the mode flips."""
    mode = st.session_state[wkey("dp_mode")]
    key = wkey("down_payment")
    current = float(st.session_state.get(key, 0.0))
    if offer_price <= 0 or current <= 0:
        return
    if mode == "percent":
        st.session_state[key] = round(current / offer_price * 100, 1)
    else:
        st.session_state[key] = float(round(current / 100 * offer_price))


def render_property_column():
    """Property pricing, down payment and amortization inputs."""
    inp = st.session_state["inputs"]
    with st.expander("Property & Down Payment", expanded=True):
        c1, c2, c3 = st.columns(3)
        asking = number_field(c1, "Asking Price", wkey("asking_price"), inp.asking_price, min_value=0.0, step=1000.0)
        evaluation = number_field(
            c2, "Evaluation Price", wkey("evaluation_price"), inp.evaluation_price, min_value=0.0, step=1000.0
        )
        offer = number_field(c3, "Offer Price", wkey("offer_price"), inp.purchase_price, min_value=0.0, step=1000.0)
        pct = offer_percentages(offer, asking, evaluation)
        if pct["of_asking"] is not None:
            of_eval = f"{pct['of_evaluation']:.1f}%" if pct["of_evaluation"] is not None else "--"
            st.caption(f"Offer is {pct['of_asking']:.1f}% of asking • {of_eval} of evaluation")

        modes = list(MODE_LABELS)
        mode = st.radio(
            "Down Payment Mode",
            modes,
            index=modes.index(inp.down_payment_mode),
            format_func=MODE_LABELS.get,
            horizontal=True,
            key=wkey("dp_mode"),
            on_change=_convert_down_payment,
            args=(offer,),
        )
        down = number_field(
            st, f"Down Payment {MODE_LABELS[mode]}", wkey("down_payment"), inp.down_payment, min_value=0.0
        )
        extended = st.checkbox(
            "30-year amortization",
            value=inp.use_extended_amortization,
            key=wkey("is_30_year"),
            help="Adds a 0.20% CMHC surcharge",
        )
        update_inputs(
            asking_price=asking,
            evaluation_price=evaluation,
            purchase_price=offer,
            down_payment=down,
            down_payment_mode=mode,
            use_extended_amortization=extended,
        )
        dp_amount = st.session_state["inputs"].down_payment_amount()
        if offer > 0 and dp_amount > 0:
            ins = insurance_calculation(offer, dp_amount, extended)
            if mode == "amount":
                st.caption(f"= {ins['down_payment_percent']:.1f}% of purchase price")
            else:
                st.caption(f"= ${dp_amount:,.0f}")
            rate = f"{ins['premium_rate'] * 100:.2f}%" if ins["insurance_required"] else "N/A (≥20% down)"
            st.caption(
                f"LTV: {ins['ltv'] * 100:.1f}% • Premium rate: {rate} • "
                f"Total mortgage: ${ins['total_financed_amount']:,.0f}"
            )
    return st.session_state["inputs"]
