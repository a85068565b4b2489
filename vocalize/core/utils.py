"""Shared utility functions for Vocalize."""

import base64
import binascii
import re

from vocalize.core.exceptions import ValidationError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^,;]*)(?P<params>(;[^,;]*)*),(?P<data>.*)$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping JSON from LLM responses."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```\w*\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text.strip()


def decode_data_url(value: str) -> tuple[str, bytes]:
    """Split a base64 ``data:`` URL into its MIME type and decoded bytes.

    A bare base64 string (no ``data:`` prefix) is accepted too and reported
    with an empty MIME type.

    Raises:
        ValidationError: If the payload is not valid base64.
    """
    mime_type = ""
    payload = value.strip()
    match = _DATA_URL_RE.match(payload)
    if match:
        mime_type = match.group("mime").strip().lower()
        payload = match.group("data")
    try:
        audio = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("audio", "Audio must be a base64 data URL") from exc
    if not audio:
        raise ValidationError("audio", "Audio payload is empty")
    return mime_type, audio


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Build a base64 ``data:`` URL, the inverse of ``decode_data_url``."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
