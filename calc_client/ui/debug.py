from __future__ import annotations

import glob
import os
import sys
from pathlib import Path

import certifi
import streamlit as st

from calc_client.settings import CONFIG_PATH, Settings


def debug_panel(settings: Settings):
    st.sidebar.markdown("---")
    st.sidebar.subheader("🔧 Debug")
    dbg = st.sidebar.checkbox("Enable debug mode")
    if not dbg:
        return

    st.sidebar.write("**Python**:", sys.version)
    st.sidebar.write("**Interpreter**:", sys.executable)
    st.sidebar.write("**CWD**:", os.getcwd())

    env_paths = [Path(".env"), *[Path(p) for p in glob.glob("**/.env", recursive=False)]]
    env_exists = [str(p.resolve()) for p in env_paths if p.exists()]
    st.sidebar.write("**.env found at**:", env_exists or "(none)")
    st.sidebar.write("**app.toml**:", str(CONFIG_PATH) if CONFIG_PATH.exists() else "(none)")

    st.sidebar.write("**API base URL**:", settings.api_base_url)
    st.sidebar.write(
        "**Request timeout**:",
        f"{settings.request_timeout} s" if settings.request_timeout else "(transport default)",
    )

    # Network / TLS diagnostics
    st.sidebar.markdown("**Network/TLS diagnostics**")
    st.sidebar.write("certifi CA bundle:", certifi.where())
    for k in ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "HTTPS_PROXY", "HTTP_PROXY", "NO_PROXY"):
        v = os.getenv(k)
        st.sidebar.write(f"{k}:", v if v else "(unset)")

    if st.sidebar.button("🔄 Rerun"):
        st.rerun()
