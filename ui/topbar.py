import logging

import streamlit as st

from homebudget import __version__, state
from homebudget.state import StateImportError
from ui.forms import apply_inputs, default_inputs

logger = logging.getLogger(__name__)


def _reset() -> None:
    apply_inputs(default_inputs())


def render_topbar():
    """Title row with JSON import and reset."""
    left, center, right = st.columns([2, 2, 1])
    with left:
        st.markdown(f"**Home Budget Calculator v{__version__}**")
        st.caption("Quebec home purchase affordability")
    with center:
        up = st.file_uploader("Import JSON", type="json", key="import_json")
        if up is not None:
            signature = (up.name, up.size)
            if st.session_state.get("imported_file") != signature:
                try:
                    inputs = state.import_state(up.getvalue().decode("utf-8"))
                except (StateImportError, UnicodeDecodeError) as e:
                    logger.warning("import of %s failed: %s", up.name, e)
                    st.error(str(e) if isinstance(e, StateImportError) else "Failed to import JSON file.")
                else:
                    apply_inputs(inputs)
                    st.success("Data imported successfully!")
                st.session_state["imported_file"] = signature
    with right:
        st.button("Reset", key="reset_form", on_click=_reset)
