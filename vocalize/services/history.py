"""Append-only version history of practice attempts.

Attempts are appended when a recording finishes and are never reordered or
deleted. After creation an attempt changes only through the one-time score
and suggestion fill-ins (plus an error note when a stage fails). Attempts
are frozen models, so each write swaps in an updated copy at its index.

The history also holds the expand/collapse state of the presentation layer:
the newest attempt is expanded by default, older ones collapsed, and
``toggle()`` overrides the default per attempt.
"""

import logging
from collections.abc import Iterator

from vocalize.core.models import Attempt, ScoreReport, Suggestion

logger = logging.getLogger(__name__)


class VersionHistory:
    """Ordered log of attempts addressed by zero-based index."""

    def __init__(self) -> None:
        self._attempts: list[Attempt] = []
        self._expanded: dict[int, bool] = {}

    # -- writes --

    def append(self, transcript: str | None, audio_key: str, error: str | None = None) -> int:
        """Record a finished recording and return its index."""
        index = len(self._attempts)
        self._attempts.append(
            Attempt(
                version=index + 1,
                transcript=transcript,
                audio_key=audio_key,
                error=error,
            )
        )
        # A new attempt takes over the default expansion
        self._expanded.clear()
        logger.info("Appended attempt v%d", index + 1)
        return index

    def fill_score(self, index: int, report: ScoreReport) -> None:
        """Attach the score report to attempt ``index`` (once only).

        Raises:
            IndexError: If ``index`` is out of range.
            ValueError: If the attempt already has a report.
        """
        attempt = self._attempts[index]
        if attempt.report is not None:
            raise ValueError(f"Attempt v{attempt.version} already has a score report")
        self._attempts[index] = attempt.model_copy(update={"report": report})

    def fill_suggestions(self, index: int, suggestions: list[Suggestion]) -> None:
        """Attach suggestions to attempt ``index`` (once, after scoring).

        Raises:
            IndexError: If ``index`` is out of range.
            ValueError: If the attempt has no report yet or already has
                suggestions.
        """
        attempt = self._attempts[index]
        if attempt.report is None:
            raise ValueError(f"Attempt v{attempt.version} has no score report yet")
        if attempt.suggestions is not None:
            raise ValueError(f"Attempt v{attempt.version} already has suggestions")
        self._attempts[index] = attempt.model_copy(update={"suggestions": list(suggestions)})

    def record_error(self, index: int, message: str) -> None:
        """Note the most recent stage failure for attempt ``index``."""
        self._attempts[index] = self._attempts[index].model_copy(update={"error": message})

    # -- reads --

    def __len__(self) -> int:
        return len(self._attempts)

    def __getitem__(self, index: int) -> Attempt:
        return self._attempts[index]

    def __iter__(self) -> Iterator[Attempt]:
        return iter(list(self._attempts))

    @property
    def latest(self) -> Attempt | None:
        return self._attempts[-1] if self._attempts else None

    # -- expansion state --

    def is_expanded(self, index: int) -> bool:
        if index in self._expanded:
            return self._expanded[index]
        return index == len(self._attempts) - 1

    def toggle(self, index: int) -> bool:
        """Flip the expansion state of attempt ``index`` and return it."""
        if not 0 <= index < len(self._attempts):
            raise IndexError(index)
        self._expanded[index] = not self.is_expanded(index)
        return self._expanded[index]
