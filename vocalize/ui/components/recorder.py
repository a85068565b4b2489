"""
Recorder component: feeds ``st.audio_input`` clips to the controller.

The ``RecordingController`` lives in session state so its history and
clip store survive reruns. Each new clip is recorded, transcribed, scored
and given suggestions before the page is rendered again.
"""

import asyncio
import logging

import streamlit as st

from vocalize.core.config import get_settings
from vocalize.services.audio.capture import DEFAULT_MIME_TYPE, BufferedCapture
from vocalize.services.recorder import RecordingController
from vocalize.ui.api_client import get_api_client
from vocalize.ui.backend import HttpBackend

logger = logging.getLogger(__name__)


def get_controller() -> RecordingController:
    """Return the session's controller, creating it on first use."""
    if st.session_state.get("controller") is None:
        client = get_api_client(st.session_state.get("api_base_url", get_settings().api_base_url))
        st.session_state.controller = RecordingController(HttpBackend(client))
    return st.session_state.controller


async def _record(controller: RecordingController, capture: BufferedCapture) -> None:
    await controller.record_clip(capture)
    await controller.wait_for_pipelines()


def _process_clip(data: bytes, mime_type: str | None) -> None:
    controller = get_controller()
    capture = BufferedCapture(data, mime_type or DEFAULT_MIME_TYPE)
    with st.spinner("Transcribing and scoring..."):
        asyncio.run(_record(controller, capture))


def render_recorder() -> None:
    """Render the audio input and process any newly recorded clip."""
    controller = get_controller()
    limit = controller.time_limit
    if limit:
        st.caption(f"Speak for up to {limit:g} seconds. Longer recordings are cut off.")

    audio = st.audio_input("Record your speech", key="audio_input")
    if audio is not None:
        clip_id = getattr(audio, "file_id", None) or audio.name
        if clip_id != st.session_state.get("last_clip_id"):
            st.session_state.last_clip_id = clip_id
            _process_clip(audio.getvalue(), audio.type)

    if controller.last_capture_error:
        st.error(f"Could not record: {controller.last_capture_error}")
    elif controller.last_clip_trimmed:
        st.info(f"Your recording was cut off at {limit:g} seconds.")


def rebind_controller(base_url: str) -> None:
    """Point the session's controller at a new backend, keeping its history."""
    old = st.session_state.get("controller")
    if old is None:
        return
    st.session_state.controller = RecordingController(
        HttpBackend(get_api_client(base_url)),
        history=old.history,
        clip_store=old.clip_store,
    )
