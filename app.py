from __future__ import annotations

import logging

import streamlit as st

from calc_client.session import EXPRESSION_ID_KEY, EXPRESSION_KEY, get_flows, get_session
from calc_client.settings import load_settings
from calc_client.ui.debug import debug_panel


settings = load_settings()
logging.basicConfig(level=settings.log_level)

st.set_page_config(page_title=settings.page_title, layout="wide")
st.title(settings.page_title)
st.caption("Submit an expression → refresh the list → look one up by ID.")

st.sidebar.markdown("### Settings")
st.sidebar.markdown("- Uses `API_BASE_URL` (and optional `REQUEST_TIMEOUT`) from env/.env or `config/app.toml`.")
st.sidebar.caption(f"Service: {settings.api_base_url}")

debug_panel(settings)

state = get_session()
flows = get_flows(settings)

# Callbacks only dispatch; network calls run on the session's executor.
with st.form("expression_form", clear_on_submit=False):
    st.text_input("Expression", key=EXPRESSION_KEY, placeholder="2+2*2")
    st.form_submit_button("Submit", type="primary", on_click=flows.submission.trigger)

col_list, col_detail = st.columns(2, gap="large")

with col_list:
    st.subheader("Expressions")
    st.button("Refresh list", key="refresh_button", on_click=flows.listing.trigger)

with col_detail:
    st.subheader("Expression details")
    st.text_input("Expression ID", key=EXPRESSION_ID_KEY)
    st.button("Get details", key="details_button", on_click=flows.detail.trigger)


@st.fragment(run_every=settings.refresh_interval)
def results():
    """Pick up whatever the flows have delivered since the last pass."""
    out_list, out_detail = st.columns(2, gap="large")
    with out_list:
        for line in state.lines():
            st.text(line)
    with out_detail:
        detail = state.detail()
        if detail is not None:
            st.code(detail, language="json")

    for message in state.pop_notifications():
        st.toast(message)


results()
