#!/usr/bin/env python3
"""
Custom exceptions for the matching engine.
"""


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class InvalidMaxMatchesError(MatchingError, ValueError):
    """Raised when the requested output size is negative or not an integer."""
    pass


class AIScoringError(MatchingError):
    """Raised by AI scorers when a scoring call cannot produce results."""
    pass
