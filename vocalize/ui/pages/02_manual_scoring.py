"""
Manual scoring page: rate the nine criteria yourself and compute the score.
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from vocalize.core.models import RubricRatings, ScoreReport  # noqa: E402
from vocalize.services.scoring.ai_rater import CRITERIA  # noqa: E402
from vocalize.ui.api_client import APIError, get_api_client  # noqa: E402
from vocalize.ui.components.attempt_card import render_score  # noqa: E402

st.header("Manual Scoring")
st.caption("Rate each criterion from 1 (weak) to 5 (excellent).")

ratings: dict[str, int] = {}
with st.form("manual_scoring"):
    for label, (name, info) in zip(CRITERIA, RubricRatings.model_fields.items(), strict=True):
        ratings[info.alias or name] = st.slider(label, min_value=1, max_value=5, value=3)
    submitted = st.form_submit_button("Compute score", type="primary")

if submitted:
    client = get_api_client(st.session_state.get("api_base_url", "http://localhost:8000"))
    try:
        st.session_state.manual_report = client.score(ratings)
    except APIError as exc:
        st.error(exc.message)

if st.session_state.get("manual_report"):
    render_score(ScoreReport.model_validate(st.session_state.manual_report))
