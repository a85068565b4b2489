"""
Attempt card display components.

One expander per version: score headline, per-category bars on the 0-10
scale, transcript, audio playback and suggestions grouped by category.
"""

import streamlit as st

from vocalize.core.models import Attempt, RubricCategory, ScoreReport, Suggestion
from vocalize.services.audio.store import AudioClipStore
from vocalize.services.history import VersionHistory


def render_score(report: ScoreReport) -> None:
    """Render the final score and the three category bars."""
    st.metric("Final score", f"{report.final_score:.2f}")
    st.progress(min(max(report.final_score / 100, 0.0), 1.0))

    normalized = report.normalized_scores()
    cols = st.columns(len(normalized))
    for col, (category, score) in zip(cols, normalized.items(), strict=True):
        with col:
            st.markdown(f"**{category.label}**")
            st.progress(score / 10, text=f"{score:g}/10")
            st.caption(f"{report.category(category).total}/{category.max_total} points")


def render_suggestions(suggestions: list[Suggestion]) -> None:
    """Group suggestions under their category headings."""
    for category in RubricCategory:
        items = [s for s in suggestions if s.category is category]
        if not items:
            continue
        st.markdown(f"**{category.label}**")
        for item in items:
            st.markdown(f"- {item.text}")


def render_attempt_card(
    attempt: Attempt,
    expanded: bool,
    clip_store: AudioClipStore,
) -> None:
    """Render a single attempt inside an expander."""
    title = f"Version {attempt.version}"
    if attempt.report is not None:
        title += f" - {attempt.report.final_score:.2f}"

    with st.expander(title, expanded=expanded):
        if attempt.report is not None:
            render_score(attempt.report)
        elif attempt.error is None:
            st.info("Scoring in progress...")

        if attempt.error:
            st.warning(attempt.error)

        st.subheader("Transcript")
        st.write(attempt.transcript or "")

        clip = clip_store.get(attempt.audio_key)
        if clip is not None:
            st.audio(clip.data, format=clip.mime_type.split(";", 1)[0])

        if attempt.suggestions:
            st.subheader("Suggestions")
            render_suggestions(attempt.suggestions)


def render_history(history: VersionHistory, clip_store: AudioClipStore) -> None:
    """Render every attempt, newest first."""
    if not len(history):
        st.info("No attempts yet. Record yourself to get a score.")
        return

    st.caption(f"{len(history)} attempt(s)")
    for index in reversed(range(len(history))):
        render_attempt_card(history[index], history.is_expanded(index), clip_store)
