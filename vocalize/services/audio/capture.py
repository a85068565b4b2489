"""Audio capture interface.

A capture session is opened when recording starts and closed when it stops,
yielding the recorded clip. Microphone access itself lives outside Python
(the browser records the clip), so implementations adapt whatever produced
the bytes.
"""

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import soundfile as sf

from vocalize.core.exceptions import CaptureError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "audio/webm; codecs=opus"


@dataclass(frozen=True)
class CapturedClip:
    """One recorded clip and its MIME type."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE


class AudioCapture(ABC):
    """One audio capture session."""

    @abstractmethod
    async def open(self) -> None:
        """Acquire the input device and begin capturing.

        Raises:
            CaptureError: Permission denied or device unavailable.
        """

    @abstractmethod
    async def close(self) -> CapturedClip:
        """Stop capturing, release the device and return the clip.

        Raises:
            CaptureError: If no usable audio was captured.
        """


class BufferedCapture(AudioCapture):
    """Capture over a clip that was already recorded elsewhere.

    Used by the Streamlit UI, where ``st.audio_input`` records in the
    browser and hands the finished clip to the script.
    """

    def __init__(self, data: bytes | None, mime_type: str = DEFAULT_MIME_TYPE) -> None:
        self._clip = CapturedClip(data=data or b"", mime_type=mime_type)
        self._opened = False

    async def open(self) -> None:
        if not self._clip.data:
            raise CaptureError("No audio was captured")
        self._opened = True

    async def close(self) -> CapturedClip:
        if not self._opened:
            raise CaptureError("Capture session was never opened")
        self._opened = False
        return self._clip


def trim_clip(clip: CapturedClip, max_seconds: float) -> CapturedClip:
    """Cut ``clip`` to its first ``max_seconds`` seconds as 16-bit WAV.

    Clips that are already short enough, or whose container libsndfile
    cannot decode (WebM/Opus), are returned unchanged.
    """
    try:
        with sf.SoundFile(io.BytesIO(clip.data)) as source:
            frames = int(max_seconds * source.samplerate)
            if source.frames <= frames:
                return clip
            samples = source.read(frames, dtype="int16")
            sample_rate = source.samplerate
            duration = source.frames / source.samplerate
    except sf.LibsndfileError:
        return clip

    logger.info("Trimming %.1fs clip to %ss", duration, max_seconds)
    buffer = io.BytesIO()
    sf.write(buffer, samples, sample_rate, format="WAV", subtype="PCM_16")
    return CapturedClip(data=buffer.getvalue(), mime_type="audio/wav")
