"""tone_scale.py
Classify tone levels on the -40..+40 scale into named bands and colour tiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

MIN_TONE = -40
MAX_TONE = 40

GREEN = "green"
LIGHT_GREEN = "light_green"
YELLOW = "yellow"
ORANGE = "orange"
RED = "red"

COLOR_TIERS: Tuple[str, ...] = (GREEN, LIGHT_GREEN, YELLOW, ORANGE, RED)


@dataclass(frozen=True)
class ToneLevel:
    value: int
    name: str
    description: str
    category: str
    is_positive: bool


@dataclass(frozen=True)
class ToneBand:
    name: str
    description: str
    category: str
    value: int
    color_tier: str

    def to_payload(self) -> Dict[str, str | int]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "value": self.value,
            "color_tier": self.color_tier,
        }


TONE_SCALE: Tuple[ToneLevel, ...] = (
    ToneLevel(-40, "Total Failure", "Complete defeat and hopelessness", "emotional", False),
    ToneLevel(-35, "Despair", "Deep hopelessness and depression", "emotional", False),
    ToneLevel(-30, "Apathy", "Lack of interest or concern", "emotional", False),
    ToneLevel(-25, "Gloom", "Melancholy and sadness", "emotional", False),
    ToneLevel(-20, "Disinterest", "Lack of engagement or attention", "emotional", False),
    ToneLevel(-15, "Boredom", "Lack of interest or excitement", "emotional", False),
    ToneLevel(-10, "Pessimism", "Negative outlook and expectation", "emotional", False),
    ToneLevel(-5, "Scepticism", "Doubt and questioning", "mental", False),
    ToneLevel(0, "Neutrality", "Neutral state, no strong emotion", "neutral", False),
    ToneLevel(5, "Optimism", "Positive outlook and expectation", "emotional", True),
    ToneLevel(10, "Cheerful", "Happy and lighthearted", "emotional", True),
    ToneLevel(15, "Gay", "Cheerful and carefree (1950s usage)", "emotional", True),
    ToneLevel(20, "Mastery", "Control and competence", "emotional", True),
    ToneLevel(25, "Peace", "Calm and tranquility", "emotional", True),
    ToneLevel(30, "Ecstatic", "Intense joy and elation", "emotional", True),
    ToneLevel(40, "Serenity of Beingness", "Perfect peace and beingness", "emotional", True),
)

# (inclusive lower bound, tier), evaluated high to low; anything lower is red.
_TIER_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (15, GREEN),
    (5, LIGHT_GREEN),
    (0, YELLOW),
    (-10, ORANGE),
)

_GRADIENT_STOPS: Tuple[Tuple[float, str], ...] = (
    (0.0, "#ef4444"),
    (25.0, "#f97316"),
    (37.5, "#eab308"),
    (50.0, "#84cc16"),
    (62.5, "#22c55e"),
    (75.0, "#10b981"),
    (87.5, "#06b6d4"),
    (100.0, "#3b82f6"),
)


def clamp_tone(value: int) -> int:
    return max(MIN_TONE, min(MAX_TONE, value))


def color_tier(tone: int) -> str:
    for lower_bound, tier in _TIER_THRESHOLDS:
        if tone >= lower_bound:
            return tier
    return RED


def nearest_level(tone: float) -> ToneLevel:
    """Closest anchor on the scale; ties go to the lower anchor."""
    closest = TONE_SCALE[0]
    min_diff = abs(closest.value - tone)
    for level in TONE_SCALE[1:]:
        diff = abs(level.value - tone)
        if diff < min_diff:
            closest = level
            min_diff = diff
    return closest


def band_of(tone: int) -> ToneBand:
    level = nearest_level(tone)
    return ToneBand(
        name=level.name,
        description=level.description,
        category=level.category,
        value=level.value,
        color_tier=color_tier(tone),
    )


def tone_percentage(tone: float) -> float:
    percentage = (tone - MIN_TONE) / (MAX_TONE - MIN_TONE) * 100
    return max(0.0, min(100.0, percentage))


def is_positive_tone(tone: float) -> bool:
    return tone > 0


def is_negative_tone(tone: float) -> bool:
    return tone < 0


def is_neutral_tone(tone: float) -> bool:
    return tone == 0


def tone_category(tone: float) -> str:
    return nearest_level(tone).category


def calculate_tone_change(start: int, end: int) -> int:
    return end - start


def tone_range() -> Dict[str, int]:
    return {"min": MIN_TONE, "max": MAX_TONE}


def levels_in_range(lower: int, upper: int) -> List[ToneLevel]:
    return [level for level in TONE_SCALE if lower <= level.value <= upper]


def gradient_stops() -> List[Dict[str, float | str]]:
    return [{"position": position, "color": color} for position, color in _GRADIENT_STOPS]


__all__ = [
    "COLOR_TIERS",
    "GREEN",
    "LIGHT_GREEN",
    "MAX_TONE",
    "MIN_TONE",
    "ORANGE",
    "RED",
    "TONE_SCALE",
    "ToneBand",
    "ToneLevel",
    "YELLOW",
    "band_of",
    "calculate_tone_change",
    "clamp_tone",
    "color_tier",
    "gradient_stops",
    "is_negative_tone",
    "is_neutral_tone",
    "is_positive_tone",
    "levels_in_range",
    "nearest_level",
    "tone_category",
    "tone_percentage",
    "tone_range",
]
