"""Per-browser-session state: display regions, notifications, and flows.

Flow results arrive on executor threads; every read and write of the display
state goes through ``SessionState._lock``.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

import streamlit as st

from calc_client.flows import Flows, build_flows
from calc_client.services import create_client
from calc_client.settings import Settings

# Widget keys for the two text inputs
EXPRESSION_KEY = "expression_input"
EXPRESSION_ID_KEY = "expression_id_input"


@dataclass
class SessionState:
    """Display state owned by the flows of one browser session."""

    # List region: replaced wholesale by every successful listing
    expression_lines: List[str] = field(default_factory=list)

    # Detail region: pretty-printed record, None until the first lookup
    detail_text: Optional[str] = None

    # Transient notifications waiting to be shown
    notifications: List[str] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def show_lines(self, lines: List[str]) -> None:
        with self._lock:
            self.expression_lines = list(lines)

    def show_detail(self, text: str) -> None:
        with self._lock:
            self.detail_text = text

    def notify(self, message: str) -> None:
        with self._lock:
            self.notifications.append(message)

    def lines(self) -> List[str]:
        with self._lock:
            return list(self.expression_lines)

    def detail(self) -> Optional[str]:
        with self._lock:
            return self.detail_text

    def pop_notifications(self) -> List[str]:
        """Get and clear all notifications."""
        with self._lock:
            pending, self.notifications = self.notifications, []
        return pending


def get_session() -> SessionState:
    """Get or create session state."""
    if "app_state" not in st.session_state:
        st.session_state.app_state = SessionState()
    return st.session_state.app_state


def _widget_text(key: str) -> str:
    return st.session_state.get(key) or ""


def get_flows(settings: Settings) -> Flows:
    """Build the three flows once per session and reuse them on every rerun."""
    if "flows" not in st.session_state:
        state = get_session()
        executor = ThreadPoolExecutor(
            max_workers=settings.max_workers, thread_name_prefix="calc-flow"
        )
        st.session_state.flows = build_flows(
            create_client(settings),
            read_expression=lambda: _widget_text(EXPRESSION_KEY),
            read_identifier=lambda: _widget_text(EXPRESSION_ID_KEY),
            show_lines=state.show_lines,
            show_detail=state.show_detail,
            notify=state.notify,
            executor=executor,
        )
    return st.session_state.flows
