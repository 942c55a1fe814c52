import streamlit as st

from homebudget.calculators import land_transfer_tax, suggested_upkeep
from homebudget.models import OneTimeCosts, RecurringCosts, RenovationItem
from ui.forms import number_field, update_inputs, wkey


def _suggest_upkeep(price: float) -> None:
    amount = suggested_upkeep(price)
    if amount > 0:
        st.session_state[wkey("upkeep")] = float(round(amount))


def render_monthly_costs():
    inp = st.session_state["inputs"]
    rc = inp.recurring
    with st.expander("Monthly Costs"):
        c1, c2 = st.columns(2)
        insurance = number_field(c1, "Home Insurance", wkey("insurance"), rc.insurance, min_value=0.0)
        utility = number_field(c2, "Electricity / Heating", wkey("electricity"), rc.utility, min_value=0.0)
        upkeep = number_field(c1, "Upkeep", wkey("upkeep"), rc.upkeep, min_value=0.0)
        c2.button(
            "Suggest Upkeep (1% / yr)",
            key=wkey("suggest_upkeep"),
            on_click=_suggest_upkeep,
            args=(inp.purchase_price,),
        )
        city = number_field(st, "City Taxes (annual)", wkey("city_taxes"), inp.annual_property_tax, min_value=0.0)
        if city > 0:
            st.caption(f"= ${city / 12:,.0f}/mo")
    update_inputs(
        recurring=RecurringCosts(insurance=insurance, utility=utility, upkeep=upkeep),
        annual_property_tax=city,
    )


def render_one_time_costs():
    inp = st.session_state["inputs"]
    ot = inp.one_time
    with st.expander("One-Time Costs"):
        welcome = land_transfer_tax(inp.purchase_price)
        st.caption(f"Welcome tax: ${welcome['total_tax']:,.0f}")
        c1, c2 = st.columns(2)
        notary = number_field(c1, "Notary Fees", wkey("notary_fees"), ot.notary_fees, min_value=0.0)
        moving = number_field(c2, "Movers", wkey("moving_base"), ot.moving_base, min_value=0.0)
        sqft = number_field(c1, "Square Footage", wkey("square_footage"), ot.square_footage, min_value=0.0)
        paint = number_field(c2, "Paint ($/sqft)", wkey("paint_per_sqft"), ot.paint_per_sqft, min_value=0.0)
        st.caption(f"Paint total: ${sqft * paint:,.0f}")
        render_renovations()
    update_inputs(
        one_time=OneTimeCosts(
            notary_fees=notary,
            moving_base=moving,
            paint_per_sqft=paint,
            square_footage=sqft,
        )
    )


def render_renovations():
    slots = st.session_state["renovation_items"]
    st.markdown("**Renovations**")
    for sid, item in list(slots.items()):
        c1, c2, c3 = st.columns([3, 2, 1])
        desc = c1.text_input("Description", value=item.description, key=wkey("reno_desc", sid))
        amount = number_field(c2, "Amount", wkey("reno_amount", sid), item.amount, min_value=0.0)
        slots.replace(sid, RenovationItem(description=desc, amount=amount))
        c3.button("Remove", key=wkey("reno_remove", sid), on_click=slots.remove, args=(sid,))
    st.button("Add Renovation", key=wkey("add_reno"), on_click=slots.add, args=(RenovationItem(),))
    total = sum(r.amount for r in slots)
    st.caption(f"Renovations total: ${total:,.0f}")
