"""Audio module - clip capture interface and the in-session clip store."""

from .capture import AudioCapture, BufferedCapture, CapturedClip
from .store import AudioClipStore

__all__ = ["AudioCapture", "AudioClipStore", "BufferedCapture", "CapturedClip"]
