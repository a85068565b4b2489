"""Tests for audio capture sessions and the in-session clip store."""

import pytest

from vocalize.core.exceptions import CaptureError
from vocalize.services.audio import AudioClipStore, BufferedCapture, CapturedClip


class TestBufferedCapture:
    async def test_open_then_close_returns_clip(self):
        capture = BufferedCapture(b"abc", "audio/ogg")

        await capture.open()
        clip = await capture.close()

        assert clip == CapturedClip(b"abc", "audio/ogg")

    async def test_empty_clip_cannot_open(self):
        with pytest.raises(CaptureError) as exc_info:
            await BufferedCapture(None).open()

        assert exc_info.value.code == "CAPTURE_ERROR"

    async def test_close_without_open(self):
        with pytest.raises(CaptureError):
            await BufferedCapture(b"abc").close()


class TestAudioClipStore:
    def test_put_and_get(self):
        store = AudioClipStore()
        clip = CapturedClip(b"abc", "audio/webm; codecs=opus")

        key = store.put(3, clip)

        assert key == "audio_v3"
        assert key in store
        assert len(store) == 1
        assert store.get(key) is clip

    def test_data_url(self):
        store = AudioClipStore()
        store.put(1, CapturedClip(b"abc", "audio/webm; codecs=opus"))

        assert store.data_url("audio_v1") == "data:audio/webm;codecs=opus;base64,YWJj"

    def test_unknown_key(self):
        store = AudioClipStore()

        assert store.get("audio_v9") is None
        assert store.data_url("audio_v9") is None
