import logging
import os

import streamlit as st

from homebudget import state
from homebudget.snapshot import calculate
from ui.bottombar import render_bottombar
from ui.costs import render_monthly_costs, render_one_time_costs
from ui.dashboard import render_dashboard
from ui.financing import render_financing_sources
from ui.forms import current_inputs, init_session
from ui.household import render_household
from ui.property import render_property_column
from ui.topbar import render_topbar

logging.basicConfig(
    level=os.environ.get("HOMEBUDGET_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="Home Budget Calculator", layout="wide")

init_session()
render_topbar()

left, right = st.columns([1, 1])
with left:
    render_property_column()
    render_monthly_costs()
    render_one_time_costs()
    render_financing_sources()
    render_household()

inputs = current_inputs()
snapshot = calculate(inputs)
with right:
    render_dashboard(snapshot)

render_bottombar(inputs, snapshot)
state.save_state(inputs)
