"""Recording session controller.

State machine: READY -> RECORDING -> TRANSCRIBING -> READY.

Only one capture runs at a time; ``start()`` outside READY and ``stop()``
outside RECORDING are no-ops, and a ``stop()`` while the device is still
opening cancels the recording. A recording stops on the user's action or
when the time limit elapses; longer pre-recorded clips are trimmed to the
limit. Once transcription settles the attempt is appended
to the history, its score/suggest pipeline is launched as a background task,
and the controller returns to READY without waiting for it.

Usage::

    controller = RecordingController(backend)
    await controller.start(capture)
    attempt = await controller.stop()
    await controller.wait_for_pipelines()
"""

import asyncio
import logging
import time
from enum import StrEnum

from vocalize.core.config import get_settings
from vocalize.core.models import Attempt
from vocalize.services.audio.capture import AudioCapture, trim_clip
from vocalize.services.audio.store import AudioClipStore
from vocalize.services.history import VersionHistory
from vocalize.services.practice import TRANSCRIPTION_FAILED, PracticeBackend, PracticePipeline

logger = logging.getLogger(__name__)


class RecorderState(StrEnum):
    """Possible states of the recording controller."""

    ready = "ready"
    recording = "recording"
    transcribing = "transcribing"


class RecordingController:
    """Orchestrates capture, transcription and the per-attempt pipeline.

    Args:
        backend: Transcription / scoring / suggestion calls.
        history: Version history to append to (a fresh one by default).
        clip_store: Where recorded clips are kept for playback.
        time_limit: Seconds before an automatic stop; 0 disables the limit.
            None uses ``settings.recording_time_limit``.
    """

    def __init__(
        self,
        backend: PracticeBackend,
        history: VersionHistory | None = None,
        clip_store: AudioClipStore | None = None,
        time_limit: float | None = None,
    ) -> None:
        self.history = history if history is not None else VersionHistory()
        self.clip_store = clip_store if clip_store is not None else AudioClipStore()
        if time_limit is None:
            time_limit = get_settings().recording_time_limit
        self.time_limit = time_limit or None
        self.last_capture_error: str | None = None
        self.last_clip_trimmed = False

        self._backend = backend
        self._pipeline = PracticePipeline(backend, self.history)
        self._state = RecorderState.ready
        self._capture: AudioCapture | None = None
        self._cancel_open = False
        self._started_at: float | None = None
        self._timer: asyncio.Task | None = None
        self._pipelines: set[asyncio.Task] = set()

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def elapsed(self) -> float:
        """Seconds recorded so far (0 when not recording)."""
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    async def start(self, capture: AudioCapture) -> bool:
        """Open a capture session if the controller is READY.

        Returns:
            True if recording started. False if another recording or
            transcription is in progress, or the capture could not be
            opened (see ``last_capture_error``).
        """
        if self._state is not RecorderState.ready:
            logger.info("Ignoring start while %s", self._state)
            return False

        # Claim the state before the first await so a second start is refused
        self._state = RecorderState.recording
        self._cancel_open = False
        self.last_capture_error = None
        self.last_clip_trimmed = False
        try:
            await capture.open()
        except Exception as exc:
            logger.warning("Could not start recording: %s", exc)
            self.last_capture_error = getattr(exc, "detail", str(exc))
            self._state = RecorderState.ready
            return False

        if self._cancel_open:
            # stop() arrived while the device was still opening
            logger.info("Recording cancelled before it started")
            try:
                await capture.close()
            except Exception as exc:
                logger.warning("Could not release capture: %s", exc)
            self._state = RecorderState.ready
            return False

        self._capture = capture
        self._started_at = time.monotonic()
        if self.time_limit:
            self._timer = asyncio.create_task(self._stop_after_limit(self.time_limit))
        logger.info("Recording started (limit=%ss)", self.time_limit)
        return True

    async def _stop_after_limit(self, limit: float) -> None:
        await asyncio.sleep(limit)
        logger.info("Time limit of %ss reached; stopping", limit)
        await self.stop()

    async def stop(self) -> Attempt | None:
        """Stop recording, transcribe the clip and launch its pipeline.

        Returns:
            The appended attempt, or None if not recording or the clip could
            not be collected.
        """
        if self._state is not RecorderState.recording:
            return None
        if self._capture is None:
            self._cancel_open = True
            return None
        self._state = RecorderState.transcribing

        timer, self._timer = self._timer, None
        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()
        capture, self._capture = self._capture, None

        try:
            try:
                clip = await capture.close()
            except Exception as exc:
                logger.warning("Could not finish recording: %s", exc)
                self.last_capture_error = getattr(exc, "detail", str(exc))
                return None

            if self.time_limit:
                trimmed = trim_clip(clip, self.time_limit)
                self.last_clip_trimmed = trimmed is not clip
                clip = trimmed

            audio_key = self.clip_store.put(len(self.history) + 1, clip)
            error = None
            try:
                transcript = await self._backend.transcribe(clip)
            except Exception as exc:
                logger.warning("Transcription failed: %s", exc)
                transcript = TRANSCRIPTION_FAILED
                error = f"Transcription failed: {exc}"

            index = self.history.append(transcript, audio_key, error=error)
            self._launch_pipeline(index, transcript)
            return self.history[index]
        finally:
            self._started_at = None
            self._state = RecorderState.ready

    async def record_clip(self, capture: AudioCapture) -> Attempt | None:
        """Start and immediately stop, for clips that are already recorded."""
        if not await self.start(capture):
            return None
        return await self.stop()

    def _launch_pipeline(self, index: int, transcript: str) -> None:
        task = asyncio.create_task(self._pipeline.run(index, transcript))
        self._pipelines.add(task)
        task.add_done_callback(self._pipelines.discard)

    async def wait_for_pipelines(self) -> None:
        """Wait until every launched score/suggest pipeline has finished."""
        while True:
            pending = [task for task in self._pipelines if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
