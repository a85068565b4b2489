"""
Scoring REST endpoints.

Implements direct rubric scoring, AI-derived scoring from a transcript,
and improvement suggestions for category scores.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from vocalize.api.dependencies import get_rater, get_suggester
from vocalize.core.models import (
    AiScoreRequest,
    RubricRatings,
    ScoreReport,
    SuggestionsRequest,
    SuggestionsResponse,
)
from vocalize.services.scoring import AIRater, compute_score_report
from vocalize.services.suggestions import SuggestionGenerator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scoring"])


@router.post("/score", response_model=ScoreReport)
async def score(body: Any = Body(None)):
    """Compute the weighted score report for nine caller-supplied ratings."""
    ratings = RubricRatings.from_mapping(body)
    return compute_score_report(ratings)


@router.post("/ai-score", response_model=ScoreReport)
async def ai_score(request: AiScoreRequest, rater: AIRater = Depends(get_rater)):
    """Have the LLM rate a transcript, then compute its score report."""
    report = await rater.score(request.transcription)
    logger.info("AI score computed: final=%.2f", report.final_score)
    return report


@router.post("/generate-suggestions", response_model=SuggestionsResponse)
async def generate_suggestions(
    request: SuggestionsRequest,
    suggester: SuggestionGenerator = Depends(get_suggester),
):
    """Ask the LLM for up to five suggestions for the given 0-10 scores."""
    suggestions = await suggester.request_suggestions(request.categories)
    return SuggestionsResponse(suggestions=suggestions)
