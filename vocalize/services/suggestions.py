"""
Improvement suggestion service.

Sends the three rubric categories with their 0-10 scores to the configured
LLM and parses the reply as a JSON array of ``{"category", "text"}`` objects.
At most ``MAX_SUGGESTIONS`` suggestions are returned.
"""

import json
import logging

from vocalize.core.config import get_settings
from vocalize.core.exceptions import UpstreamFormatError, UpstreamTransportError, ValidationError
from vocalize.core.models import CategoryScoreInput, RubricCategory, ScoreReport, Suggestion
from vocalize.core.utils import strip_code_fences
from vocalize.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5

PROMPT_TEMPLATE = (
    "As an expert public speaking coach, provide improvement suggestions for the "
    "following categories based on their scores. Give 1-2 concise, actionable "
    "suggestions for each category. The total number of suggestions should not "
    "exceed {limit}.\n\n"
    "Categories and scores:\n{scores}\n\n"
    "Format your response as a JSON array of objects, each with 'category' and "
    "'text' properties. Use exactly one of these category names: {labels}. "
    "For example:\n"
    "[\n"
    '  {{"category": "Content & Structure", "text": "Strengthen your thesis statement '
    'by making it more specific and arguable."}},\n'
    '  {{"category": "Delivery & Vocal Control", "text": "Practice varying your pitch '
    'and tone to add emphasis to key points."}}\n'
    "]\n"
    "Output ONLY the JSON array, no markdown fences or extra text."
)


def category_inputs_from_report(report: ScoreReport) -> list[CategoryScoreInput]:
    """Build the suggestion request from a report, on the 0-10 scale."""
    return [
        CategoryScoreInput(name=category.label, score=score)
        for category, score in report.normalized_scores().items()
    ]


def resolve_categories(
    categories: list[CategoryScoreInput],
) -> list[tuple[RubricCategory, float]]:
    """Map request category names onto ``RubricCategory`` members.

    Raises:
        ValidationError: If a name matches no rubric category.
    """
    resolved = []
    for index, item in enumerate(categories):
        try:
            resolved.append((RubricCategory.from_label(item.name), item.score))
        except ValueError:
            raise ValidationError(
                f"categories[{index}].name", f"Unknown category: {item.name}"
            ) from None
    return resolved


def build_suggestions_prompt(categories: list[tuple[RubricCategory, float]]) -> str:
    scores = "\n".join(f"{category.label}: {score:g}/10" for category, score in categories)
    labels = ", ".join(f'"{member.label}"' for member in RubricCategory)
    return PROMPT_TEMPLATE.format(limit=MAX_SUGGESTIONS, scores=scores, labels=labels)


def parse_suggestions(text: str) -> list[Suggestion]:
    """Parse the LLM reply into at most ``MAX_SUGGESTIONS`` suggestions.

    Entries whose category is not a rubric category are dropped.

    Raises:
        UpstreamFormatError: If the reply is not a JSON array of objects
            with string ``category`` and ``text`` properties.
    """
    try:
        data = json.loads(strip_code_fences(text or ""))
    except json.JSONDecodeError as exc:
        raise UpstreamFormatError(f"Invalid JSON from AI: {(text or '')[:200]!r}") from exc

    if not isinstance(data, list):
        raise UpstreamFormatError("Suggestions must be a JSON array")

    suggestions: list[Suggestion] = []
    for item in data:
        if not (
            isinstance(item, dict)
            and isinstance(item.get("category"), str)
            and isinstance(item.get("text"), str)
        ):
            raise UpstreamFormatError(f"Malformed suggestion entry: {item!r}")
        try:
            category = RubricCategory.from_label(item["category"])
        except ValueError:
            logger.warning("Dropping suggestion with unknown category %r", item["category"])
            continue
        suggestions.append(Suggestion(category=category, text=item["text"].strip()))

    return suggestions[:MAX_SUGGESTIONS]


class SuggestionGenerator:
    """Generates rubric improvement suggestions with an LLM provider."""

    def __init__(
        self, llm: BaseLLM, temperature: float | None = None, max_tokens: int = 500
    ) -> None:
        self._llm = llm
        self._temperature = (
            temperature if temperature is not None else get_settings().llm_temperature
        )
        self._max_tokens = max_tokens

    async def request_suggestions(self, categories: list[CategoryScoreInput]) -> list[Suggestion]:
        """Ask the LLM for improvement suggestions for the given categories.

        Args:
            categories: Category display names with their 0-10 scores.

        Returns:
            Up to ``MAX_SUGGESTIONS`` suggestions; empty if no categories.

        Raises:
            ValidationError: If a category name is unknown.
            UpstreamTransportError: If the LLM call fails.
            UpstreamFormatError: If the reply cannot be parsed.
        """
        resolved = resolve_categories(categories)
        if not resolved:
            return []

        prompt = build_suggestions_prompt(resolved)
        try:
            raw_response = await self._llm.generate(
                prompt, temperature=self._temperature, max_tokens=self._max_tokens
            )
        except (ConnectionError, TimeoutError, RuntimeError) as exc:
            raise UpstreamTransportError(f"Suggestion request failed: {exc}") from exc

        return parse_suggestions(raw_response)
