"""
Pydantic v2 request / response models used across the API layer.

Wire format is camelCase JSON (``thesisClarity``, ``finalScore``); Python
attributes stay snake_case. Both spellings are accepted on input.
"""

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from vocalize.core.exceptions import ValidationError

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Rubric
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    """Frozen model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _normalize_label(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower().replace("&", "and"))


class RubricCategory(StrEnum):
    """The three top-level rubric categories.

    Values are the wire keys used in ``ScoreReport``; ``label`` is the
    human-readable name shown in the UI and exchanged with the LLM.
    """

    content_and_structure = "contentAndStructure"
    delivery_and_vocal_control = "deliveryAndVocalControl"
    language_use_and_style = "languageUseAndStyle"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def max_total(self) -> int:
        return _CATEGORY_MAX_TOTALS[self]

    @classmethod
    def from_label(cls, value: str) -> "RubricCategory":
        """Resolve a display label, wire key or member name to a category.

        Matching ignores case, whitespace, punctuation and "&" vs "and", so
        "Content and Structure", "content & structure" and
        "contentAndStructure" all resolve to the same member.

        Raises:
            ValueError: If the value matches no category.
        """
        if isinstance(value, cls):
            return value
        key = _normalize_label(str(value))
        for member in cls:
            if key in (_normalize_label(member.label), _normalize_label(member.value)):
                return member
        raise ValueError(f"Unknown rubric category: {value!r}")


_CATEGORY_LABELS = {
    RubricCategory.content_and_structure: "Content & Structure",
    RubricCategory.delivery_and_vocal_control: "Delivery & Vocal Control",
    RubricCategory.language_use_and_style: "Language Use & Style",
}

_CATEGORY_MAX_TOTALS = {
    RubricCategory.content_and_structure: 40,
    RubricCategory.delivery_and_vocal_control: 40,
    RubricCategory.language_use_and_style: 20,
}

RATING_MIN = 1
RATING_MAX = 5


def validate_rating(field: str, value: Any) -> int:
    """Check one rubric rating and return it as an ``int``.

    Integral floats (``4.0``) are accepted; booleans, strings, NaN and
    non-integral numbers are not.

    Raises:
        ValidationError: If the value is not an integer in [1, 5].
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(field)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(field)
        value = int(value)
    if not RATING_MIN <= value <= RATING_MAX:
        raise ValidationError(field)
    return value


class RubricRatings(_CamelModel):
    """Nine raw 1-5 ratings, one per rubric criterion."""

    thesis_clarity: int = Field(ge=RATING_MIN, le=RATING_MAX)
    organization: int = Field(ge=RATING_MIN, le=RATING_MAX)
    support_evidence: int = Field(ge=RATING_MIN, le=RATING_MAX)
    pacing_pausing: int = Field(ge=RATING_MIN, le=RATING_MAX)
    volume_clarity: int = Field(ge=RATING_MIN, le=RATING_MAX)
    vocal_variety: int = Field(ge=RATING_MIN, le=RATING_MAX)
    grammar_syntax: int = Field(ge=RATING_MIN, le=RATING_MAX)
    appropriateness: int = Field(ge=RATING_MIN, le=RATING_MAX)
    word_choice_rhetoric: int = Field(ge=RATING_MIN, le=RATING_MAX)

    @classmethod
    def from_mapping(cls, data: Any) -> "RubricRatings":
        """Build ratings from a camelCase or snake_case mapping.

        Fields are checked in rubric order and the first bad one is reported.

        Raises:
            ValidationError: If ``data`` is not a mapping, or a field is
                missing, non-integer or outside [1, 5].
        """
        if not isinstance(data, Mapping):
            raise ValidationError("body", "Rubric ratings must be a JSON object")
        values: dict[str, int] = {}
        for name, info in cls.model_fields.items():
            alias = info.alias or name
            raw = data.get(alias, data.get(name))
            if raw is None:
                raise ValidationError(alias)
            values[name] = validate_rating(alias, raw)
        return cls(**values)


class CategoryScore(_CamelModel):
    """Weighted sub-scores of one rubric category.

    ``total`` is always the sum of the sub-scores and cannot be set.
    """

    category: ClassVar[RubricCategory]

    @computed_field
    @property
    def total(self) -> int:
        return sum(getattr(self, name) for name in type(self).model_fields)


class ContentAndStructureScore(CategoryScore):
    category: ClassVar[RubricCategory] = RubricCategory.content_and_structure

    thesis_clarity: int
    organization: int
    support_evidence: int


class DeliveryAndVocalControlScore(CategoryScore):
    category: ClassVar[RubricCategory] = RubricCategory.delivery_and_vocal_control

    pacing_pausing: int
    volume_clarity: int
    vocal_variety: int


class LanguageUseAndStyleScore(CategoryScore):
    category: ClassVar[RubricCategory] = RubricCategory.language_use_and_style

    grammar_syntax: int
    appropriateness: int
    word_choice_rhetoric: int


class ScoreReport(_CamelModel):
    """Weighted score breakdown derived from one set of ratings."""

    content_and_structure: ContentAndStructureScore
    delivery_and_vocal_control: DeliveryAndVocalControlScore
    language_use_and_style: LanguageUseAndStyleScore
    final_score: float = Field(ge=0, le=100)

    def category(self, category: RubricCategory) -> CategoryScore:
        return getattr(self, category.name)

    def normalized_scores(self) -> dict[RubricCategory, float]:
        """Category totals rescaled to 0-10 (total/4, total/4, total/2)."""
        return {
            member: round(self.category(member).total * 10 / member.max_total, 2)
            for member in RubricCategory
        }


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


class Suggestion(BaseModel):
    """One piece of improvement advice for a rubric category."""

    model_config = ConfigDict(frozen=True)

    category: RubricCategory
    text: str

    @field_validator("category", mode="before")
    @classmethod
    def _resolve_category(cls, value: Any) -> RubricCategory:
        return RubricCategory.from_label(value)

    @field_serializer("category")
    def _serialize_category(self, category: RubricCategory) -> str:
        return category.label


class CategoryScoreInput(BaseModel):
    """A category display name and its 0-10 score, sent for suggestions."""

    name: str
    score: float


class SuggestionsRequest(BaseModel):
    """POST /api/generate-suggestions request body."""

    categories: list[CategoryScoreInput]


class SuggestionsResponse(BaseModel):
    """POST /api/generate-suggestions response body."""

    suggestions: list[Suggestion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Scoring / transcription requests
# ---------------------------------------------------------------------------


class AiScoreRequest(BaseModel):
    """POST /api/ai-score request body."""

    transcription: str = Field(min_length=1)


class TranscribeRequest(BaseModel):
    """POST /api/transcribe request body (audio as a base64 data URL)."""

    audio: str = Field(min_length=1)


class TranscribeResponse(BaseModel):
    """POST /api/transcribe response body."""

    transcription: str


# ---------------------------------------------------------------------------
# Version history
# ---------------------------------------------------------------------------


class Attempt(BaseModel):
    """One record-transcribe-score cycle kept in the session history."""

    model_config = ConfigDict(frozen=True)

    version: int
    transcript: str | None = None
    audio_key: str
    report: ScoreReport | None = None
    suggestions: list[Suggestion] | None = None  # None until filled
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API."""

    detail: str
    code: str
    timestamp: str
