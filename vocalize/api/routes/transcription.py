"""
Transcription REST endpoint.

Accepts one recorded clip as a base64 data URL and returns its transcript.
"""

import logging

from fastapi import APIRouter, Depends

from vocalize.api.dependencies import get_stt
from vocalize.core.models import TranscribeRequest, TranscribeResponse
from vocalize.core.utils import decode_data_url
from vocalize.services.transcription import AudioEncoding, BaseSTT

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(request: TranscribeRequest, stt: BaseSTT = Depends(get_stt)):
    """Transcribe a data-URL clip.

    An unknown or missing MIME type leaves the encoding to the provider's
    configured default. A clip with no recognized speech returns the
    "No transcription available" sentinel with status 200.
    """
    mime_type, audio = decode_data_url(request.audio)
    encoding = AudioEncoding.from_mime_type(mime_type)
    logger.info("Transcribing %d bytes (mime=%r, encoding=%s)", len(audio), mime_type, encoding)
    transcription = await stt.transcribe(audio, encoding)
    return TranscribeResponse(transcription=transcription)
