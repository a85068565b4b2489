"""
Vocalize Streamlit UI: main entry point.

Run with: ``streamlit run vocalize/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from vocalize.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (vocalize/ui/),
# which removes the project root needed for absolute imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from vocalize.core.config import get_settings  # noqa: E402
from vocalize.ui.api_client import get_api_client  # noqa: E402
from vocalize.ui.components.recorder import rebind_controller  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Vocalize",
    page_icon="\U0001f3a4",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": get_settings().api_base_url,
    "controller": None,
    "last_clip_id": None,
    "manual_report": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f3a4 Vocalize")
    st.caption("Practice your speech, get scored, improve")
    st.divider()
    _url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help="URL of the Vocalize FastAPI backend server",
    )
    if _url != st.session_state.api_base_url:
        st.session_state.api_base_url = _url
        rebind_controller(_url)

    _client = get_api_client(st.session_state.api_base_url)
    _conn_ok, _conn_msg = _client.check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Navigation (multipage)
# ---------------------------------------------------------------------------
practice_page = st.Page(
    "pages/01_practice.py",
    title="Practice",
    icon="\U0001f3a4",
    default=True,
)
manual_page = st.Page(
    "pages/02_manual_scoring.py",
    title="Manual Scoring",
    icon="\U0001f4dd",
)

nav = st.navigation([practice_page, manual_page])
nav.run()
