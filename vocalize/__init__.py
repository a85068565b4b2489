"""Vocalize: public-speaking practice with AI scoring and suggestions."""

__version__ = "0.1.0"
