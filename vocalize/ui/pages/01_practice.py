"""
Practice page: record a speech, then review every attempt.

UX flow: ready -> recording -> transcribing -> ready
Uses ``st.audio_input()`` for clip capture.
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from vocalize.ui.components.attempt_card import render_history  # noqa: E402
from vocalize.ui.components.recorder import get_controller, render_recorder  # noqa: E402

st.header("Practice")
render_recorder()

st.divider()
controller = get_controller()
render_history(controller.history, controller.clip_store)
