"""feedback.py
Assemble the immutable feedback record shown after a response is chosen."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple

from arc_calculator import ARCVector, ArcImpact
from errors import ValidationError


@dataclass(frozen=True)
class Feedback:
    selected_option_id: str
    is_optimal: bool
    tone_change: int
    new_tone_level: int
    arc_impact: ARCVector
    explanation: str
    learning_points: Tuple[str, ...]
    alternative: Optional[str] = None
    timestamp: Optional[datetime] = None
    turn: Optional[int] = None

    def to_payload(self) -> Dict[str, object]:
        return {
            "selected_option_id": self.selected_option_id,
            "is_optimal": self.is_optimal,
            "tone_change": self.tone_change,
            "new_tone_level": self.new_tone_level,
            "arc_impact": self.arc_impact.to_payload(),
            "explanation": self.explanation,
            "learning_points": list(self.learning_points),
            "alternative": self.alternative,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "turn": self.turn,
        }


def build_feedback(
    *,
    next_tone: int,
    option_id: str,
    impact: ArcImpact,
    explanation: str,
    learning_points: Iterable[str],
    alternative: Optional[str] = None,
    timestamp: Optional[datetime] = None,
    turn: Optional[int] = None,
) -> Feedback:
    """Build the record for a choice whose next tone level is already known.

    ``next_tone`` must come from ``ScoreAggregator.compute_next_tone`` so the
    record carries the post-update level. ``turn`` is the aggregator's
    ``turn`` read alongside it; a record is accepted once, on that turn only.
    """
    if not option_id:
        raise ValidationError("Feedback needs the selected option id")
    if not explanation or not explanation.strip():
        raise ValidationError(f"Option '{option_id}' has no explanation")

    points = tuple(learning_points)
    if not points:
        raise ValidationError(f"Option '{option_id}' has no learning points")
    if any(not isinstance(point, str) or not point.strip() for point in points):
        raise ValidationError(f"Option '{option_id}' has a blank learning point")

    if alternative is not None and not alternative.strip():
        raise ValidationError(f"Option '{option_id}' has a blank alternative")
    has_alternative = alternative is not None
    if impact.is_optimal and has_alternative:
        raise ValidationError(f"Optimal option '{option_id}' must not carry an alternative")
    if not impact.is_optimal and not has_alternative:
        raise ValidationError(f"Non-optimal option '{option_id}' needs an alternative")

    return Feedback(
        selected_option_id=option_id,
        is_optimal=impact.is_optimal,
        tone_change=impact.total,
        new_tone_level=next_tone,
        arc_impact=impact.vector,
        explanation=explanation,
        learning_points=points,
        alternative=alternative,
        timestamp=timestamp or datetime.now(),
        turn=turn,
    )


__all__ = ["Feedback", "build_feedback"]
