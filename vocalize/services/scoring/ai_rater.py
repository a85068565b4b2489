"""
AI-derived rubric ratings.

Sends a transcript to the configured LLM with a fixed coaching prompt that
asks for nine comma-separated 1-5 scores, then parses the reply strictly:
exactly nine finite, integral values in range, or ``UpstreamFormatError``.
There is no retry and no partial fallback.
"""

import logging
import math

from vocalize.core.exceptions import UpstreamFormatError, UpstreamTransportError
from vocalize.core.models import RATING_MAX, RATING_MIN, RubricRatings, ScoreReport
from vocalize.core.utils import strip_code_fences
from vocalize.services.llm.base import BaseLLM
from vocalize.services.scoring.engine import compute_score_report

logger = logging.getLogger(__name__)

# Criterion labels in the order the model must answer
CRITERIA: tuple[str, ...] = (
    "Thesis Clarity",
    "Organization",
    "Support/Evidence",
    "Pacing/Pausing",
    "Volume/Clarity",
    "Vocal Variety",
    "Grammar/Syntax",
    "Appropriateness",
    "Word Choice/Rhetoric",
)

PROMPT_TEMPLATE = (
    "Act as an expert public English speaking coach. Evaluate the following "
    "transcript and provide a score on a scale of 1-5 for each of these categories:\n\n"
    "{criteria}\n\n"
    "Provide only the numerical scores for each category, separated by commas, "
    "in the order listed above. Do not include any other text in your response.\n\n"
    "Transcript:\n{transcript}"
)


def build_rating_prompt(transcript: str) -> str:
    """Fill the fixed rating template with the numbered criteria and transcript."""
    criteria = "\n".join(f"{i}. {name}" for i, name in enumerate(CRITERIA, start=1))
    return PROMPT_TEMPLATE.format(criteria=criteria, transcript=transcript)


def parse_rating_response(text: str) -> RubricRatings:
    """Parse the model's comma-separated scores into ``RubricRatings``.

    Values are mapped positionally onto the rubric fields.

    Raises:
        UpstreamFormatError: If there are not exactly nine values, or any
            value is not a finite integral number in [1, 5].
    """
    text = text or ""
    parts = [part.strip() for part in strip_code_fences(text).split(",")]
    fields = list(RubricRatings.model_fields)
    if len(parts) != len(fields):
        raise UpstreamFormatError(
            f"Expected {len(fields)} comma-separated scores, got {len(parts)}: {text[:200]!r}"
        )

    values: dict[str, int] = {}
    for name, part in zip(fields, parts, strict=True):
        try:
            number = float(part)
        except ValueError:
            raise UpstreamFormatError(f"Score for {name} is not a number: {part!r}") from None
        if not math.isfinite(number) or not number.is_integer():
            raise UpstreamFormatError(f"Score for {name} is not a whole number: {part!r}")
        if not RATING_MIN <= number <= RATING_MAX:
            raise UpstreamFormatError(f"Score for {name} is out of range: {part!r}")
        values[name] = int(number)
    return RubricRatings(**values)


class AIRater:
    """Rates a transcript against the rubric using an LLM provider."""

    def __init__(self, llm: BaseLLM, temperature: float = 0.1) -> None:
        self._llm = llm
        self._temperature = temperature

    async def rate(self, transcript: str) -> RubricRatings:
        """Ask the LLM for the nine rubric ratings of ``transcript``.

        Raises:
            UpstreamTransportError: If the LLM call fails.
            UpstreamFormatError: If the reply cannot be parsed.
        """
        prompt = build_rating_prompt(transcript)
        try:
            raw_response = await self._llm.generate(prompt, temperature=self._temperature)
        except (ConnectionError, TimeoutError, RuntimeError) as exc:
            raise UpstreamTransportError(f"Rating request failed: {exc}") from exc

        try:
            return parse_rating_response(raw_response)
        except UpstreamFormatError:
            logger.warning("Unparseable rating response: %r", (raw_response or "")[:200])
            raise

    async def score(self, transcript: str) -> ScoreReport:
        """Rate ``transcript`` and compute its score report."""
        ratings = await self.rate(transcript)
        return compute_score_report(ratings)
