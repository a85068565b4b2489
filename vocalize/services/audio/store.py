"""In-session audio clip store.

Keeps each attempt's raw clip under ``audio_v{version}`` so playback URLs can
be rebuilt within the same session. Nothing is written to disk.
"""

import logging

from vocalize.core.utils import encode_data_url
from vocalize.services.audio.capture import CapturedClip

logger = logging.getLogger(__name__)


class AudioClipStore:
    """Dict-backed key-value store for recorded clips."""

    def __init__(self) -> None:
        self._clips: dict[str, CapturedClip] = {}

    @staticmethod
    def key_for(version: int) -> str:
        return f"audio_v{version}"

    def put(self, version: int, clip: CapturedClip) -> str:
        """Store ``clip`` for ``version`` and return its key."""
        key = self.key_for(version)
        self._clips[key] = clip
        logger.debug("Stored %d audio bytes under %s", len(clip.data), key)
        return key

    def get(self, key: str) -> CapturedClip | None:
        return self._clips.get(key)

    def data_url(self, key: str) -> str | None:
        """Return a base64 data URL for playback, or None if the key is unknown."""
        clip = self._clips.get(key)
        if clip is None:
            return None
        return encode_data_url(clip.data, clip.mime_type.replace(" ", ""))

    def __contains__(self, key: object) -> bool:
        return key in self._clips

    def __len__(self) -> int:
        return len(self._clips)
