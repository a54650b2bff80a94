"""scoring_config.py
Tunable baselines and the ARC -> EQ weighting table, with JSON and env overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from arc_calculator import ARC_COMPONENTS
from errors import ValidationError
from tone_scale import MAX_TONE, MIN_TONE

logger = logging.getLogger(__name__)

EQ_KEYS = ("self_awareness", "self_regulation", "motivation", "empathy", "social_skills")

CONFIG_PATH_ENV = "TONE_NAVIGATOR_CONFIG"
EQ_BASELINE_ENV = "TONE_NAVIGATOR_EQ_BASELINE"
STARTING_TONE_ENV = "TONE_NAVIGATOR_STARTING_TONE"


def _default_weights() -> Dict[str, Dict[str, float]]:
    return {
        "appreciation": {"empathy": 1.0, "self_awareness": 0.5},
        "reality": {"self_regulation": 1.0, "motivation": 0.5, "self_awareness": 0.25},
        "communication": {"social_skills": 1.0, "empathy": 0.25},
    }


@dataclass
class ScoringConfig:
    """Session baselines and EQ weights; validated on construction."""

    starting_tone: int = 0
    eq_baseline: int = 50
    eq_weights: Dict[str, Dict[str, float]] = field(default_factory=_default_weights)

    def __post_init__(self) -> None:
        for name in ("starting_tone", "eq_baseline"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer, got {value!r}")
        if not MIN_TONE <= self.starting_tone <= MAX_TONE:
            raise ValidationError(
                f"starting_tone must be within [{MIN_TONE}, {MAX_TONE}], got {self.starting_tone}"
            )
        if not 0 <= self.eq_baseline <= 100:
            raise ValidationError(f"eq_baseline must be within [0, 100], got {self.eq_baseline}")
        if not isinstance(self.eq_weights, Mapping):
            raise ValidationError("eq_weights must map ARC components to EQ weights")
        for component, targets in self.eq_weights.items():
            if component not in ARC_COMPONENTS:
                raise ValidationError(f"Unknown ARC component '{component}' in eq_weights")
            if not isinstance(targets, Mapping):
                raise ValidationError(f"eq_weights['{component}'] must map EQ keys to weights")
            for eq_key, weight in targets.items():
                if eq_key not in EQ_KEYS:
                    raise ValidationError(f"Unknown EQ key '{eq_key}' in eq_weights")
                if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                    raise ValidationError(f"Weight for {component}->{eq_key} must be numeric")

    def eq_deltas(self, arc: Mapping[str, int]) -> Dict[str, float]:
        """Weighted EQ change for each key given ARC component deltas."""
        deltas = {key: 0.0 for key in EQ_KEYS}
        for component, targets in self.eq_weights.items():
            amount = arc.get(component, 0)
            for eq_key, weight in targets.items():
                deltas[eq_key] += weight * amount
        return deltas

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScoringConfig":
        weights = payload.get("eq_weights")
        if weights is not None:
            if not isinstance(weights, Mapping):
                raise ValidationError("eq_weights must be a JSON object")
            for component, targets in weights.items():
                if not isinstance(targets, Mapping):
                    raise ValidationError(f"eq_weights['{component}'] must be a JSON object")
        return cls(
            starting_tone=_as_int(payload.get("starting_tone", cls.starting_tone), "starting_tone"),
            eq_baseline=_as_int(payload.get("eq_baseline", cls.eq_baseline), "eq_baseline"),
            eq_weights=(
                {component: dict(targets) for component, targets in weights.items()}
                if weights is not None
                else _default_weights()
            ),
        )

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "ScoringConfig":
        """Read an optional JSON file, then apply environment overrides."""
        payload: Dict[str, Any] = {}
        source = path or _env_path()
        if source is not None:
            try:
                payload = json.loads(Path(source).read_text(encoding="utf-8"))
            except json.JSONDecodeError as error:
                raise ValidationError(f"Scoring config {source} is not valid JSON: {error}") from error
            if not isinstance(payload, dict):
                raise ValidationError(f"Scoring config {source} must hold a JSON object")
            logger.info(f"Loaded scoring config from {source}")

        if EQ_BASELINE_ENV in os.environ:
            payload["eq_baseline"] = os.environ[EQ_BASELINE_ENV]
        if STARTING_TONE_ENV in os.environ:
            payload["starting_tone"] = os.environ[STARTING_TONE_ENV]
        return cls.from_dict(payload)


def _env_path() -> Optional[Path]:
    value = os.environ.get(CONFIG_PATH_ENV)
    return Path(value) if value else None


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise ValidationError(f"{name} must be an integer, got {value!r}") from error


__all__ = ["EQ_KEYS", "ScoringConfig"]
