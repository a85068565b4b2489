"""
Scoring module - rubric arithmetic and AI-derived ratings.
"""

from .ai_rater import AIRater, parse_rating_response
from .engine import compute_score_report

__all__ = ["AIRater", "compute_score_report", "parse_rating_response"]
