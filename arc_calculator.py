"""arc_calculator.py
Appreciation / Reality / Communication impact of a response choice, plus the
0-10 relationship triangle used for coaching hints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from errors import ValidationError

ARC_COMPONENTS = ("appreciation", "reality", "communication")

_DISTRIBUTIONS: Dict[str, Dict[str, float]] = {
    "balanced": {"appreciation": 1 / 3, "reality": 1 / 3, "communication": 1 / 3},
    "appreciation-focused": {"appreciation": 0.5, "reality": 0.25, "communication": 0.25},
    "reality-focused": {"appreciation": 0.25, "reality": 0.5, "communication": 0.25},
    "communication-focused": {"appreciation": 0.25, "reality": 0.25, "communication": 0.5},
}

_DISTRIBUTION_FOCUS = {
    "balanced": "appreciation",
    "appreciation-focused": "appreciation",
    "reality-focused": "reality",
    "communication-focused": "communication",
}


@dataclass(frozen=True)
class ARCVector:
    appreciation: int
    reality: int
    communication: int

    @property
    def total(self) -> int:
        return self.appreciation + self.reality + self.communication

    def component(self, name: str) -> int:
        return getattr(self, name)

    def to_payload(self) -> Dict[str, int]:
        return {
            "appreciation": self.appreciation,
            "reality": self.reality,
            "communication": self.communication,
            "total": self.total,
        }


@dataclass(frozen=True)
class ArcImpact:
    vector: ARCVector
    is_optimal: bool

    @property
    def total(self) -> int:
        return self.vector.total


def arc_vector_from_mapping(deltas: Optional[Mapping[str, object]]) -> ARCVector:
    if deltas is None:
        raise ValidationError("ARC deltas are missing")
    values: Dict[str, int] = {}
    for name in ARC_COMPONENTS:
        if name not in deltas or deltas[name] is None:
            raise ValidationError(f"ARC delta '{name}' is missing")
        value = deltas[name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"ARC delta '{name}' must be an integer, got {value!r}")
        values[name] = value
    return ARCVector(**values)


def calculate_arc_impact(deltas: Mapping[str, object] | ARCVector) -> ArcImpact:
    """Total the authored deltas; a zero total is not optimal."""
    vector = deltas if isinstance(deltas, ARCVector) else arc_vector_from_mapping(deltas)
    return ArcImpact(vector=vector, is_optimal=vector.total > 0)


def distribute_tone_change(tone_change: int, distribution: str = "balanced") -> ARCVector:
    """Spread a bare tone impact over the ARC components.

    Shares are truncated to integers and the remainder is handed out one
    point at a time starting with the focus component, so the vector total
    always equals ``tone_change``.
    """
    weights = _DISTRIBUTIONS.get(distribution)
    if weights is None:
        raise ValidationError(f"Unknown ARC distribution '{distribution}'")

    shares = {name: int(tone_change * weights[name]) for name in ARC_COMPONENTS}
    remainder = tone_change - sum(shares.values())
    focus = _DISTRIBUTION_FOCUS[distribution]
    start = ARC_COMPONENTS.index(focus)
    order = ARC_COMPONENTS[start:] + ARC_COMPONENTS[:start]
    step = 1 if remainder > 0 else -1
    for index in range(abs(remainder)):
        shares[order[index % len(order)]] += step
    return ARCVector(**shares)


@dataclass(frozen=True)
class ArcState:
    """Relationship triangle, each component on a 0-10 scale."""

    appreciation: float = 5.0
    reality: float = 5.0
    communication: float = 5.0

    @property
    def total(self) -> float:
        return self.appreciation + self.reality + self.communication

    @property
    def average(self) -> float:
        return self.total / 3

    @property
    def quality_rating(self) -> str:
        average = self.average
        if average >= 8:
            return "Excellent"
        if average >= 6:
            return "Good"
        if average >= 4:
            return "Fair"
        if average >= 2:
            return "Poor"
        return "Critical"

    @property
    def balance(self) -> int:
        average = self.average
        spread = (
            abs(self.appreciation - average)
            + abs(self.reality - average)
            + abs(self.communication - average)
        )
        return round(max(0.0, 100 - spread / 10 * 100))

    @property
    def is_optimal(self) -> bool:
        return self.average >= 7

    @property
    def needs_improvement(self) -> bool:
        return self.average < 5

    def recommendations(self) -> List[str]:
        hints: List[str] = []
        if self.appreciation < 4:
            hints.append("Focus on building appreciation for others")
        if self.reality < 4:
            hints.append("Work on shared understanding and truth")
        if self.communication < 4:
            hints.append("Improve information exchange and listening")
        if self.is_optimal:
            hints.append("Maintain your strong ARC - keep practicing!")
        return hints or ["Your ARC is balanced - continue practicing!"]

    def improve(self, amount: float) -> "ArcState":
        return self._shifted(abs(amount))

    def degrade(self, amount: float) -> "ArcState":
        return self._shifted(-abs(amount))

    def apply_impact(self, vector: ARCVector) -> "ArcState":
        return ArcState(
            appreciation=_clamp_arc(self.appreciation + vector.appreciation),
            reality=_clamp_arc(self.reality + vector.reality),
            communication=_clamp_arc(self.communication + vector.communication),
        )

    def change_from(self, previous: "ArcState") -> Dict[str, float]:
        return {
            "appreciation": self.appreciation - previous.appreciation,
            "reality": self.reality - previous.reality,
            "communication": self.communication - previous.communication,
            "total": self.total - previous.total,
        }

    def _shifted(self, amount: float) -> "ArcState":
        return ArcState(
            appreciation=_clamp_arc(self.appreciation + amount),
            reality=_clamp_arc(self.reality + amount),
            communication=_clamp_arc(self.communication + amount),
        )


def _clamp_arc(value: float) -> float:
    return max(0.0, min(10.0, value))


__all__ = [
    "ARC_COMPONENTS",
    "ARCVector",
    "ArcImpact",
    "ArcState",
    "arc_vector_from_mapping",
    "calculate_arc_impact",
    "distribute_tone_change",
]
