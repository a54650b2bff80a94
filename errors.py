"""errors.py
Exceptions raised by the tone and EQ scoring engine."""

from __future__ import annotations


class ToneNavigatorError(Exception):
    """Base exception for the scoring engine."""


class ValidationError(ToneNavigatorError, ValueError):
    """Authored content or configuration is malformed."""


class InvariantViolation(ToneNavigatorError, RuntimeError):
    """An internal precondition failed; the operation left state untouched."""
