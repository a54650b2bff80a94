"""game_engine.py
Tone-aware practice game: picks authored scenarios for the current tone level
and routes each chosen response through the scoring engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from arc_calculator import ArcImpact, calculate_arc_impact
from errors import InvariantViolation, ValidationError
from feedback import Feedback
from progress_report import ProgressTracker
from scenario_data import SCENARIO_LIBRARY
from score_aggregator import ScoreAggregator, SessionState
from scoring import calculate_total_score
from scoring_config import ScoringConfig

logger = logging.getLogger(__name__)

DIFFICULTIES = ("beginner", "intermediate", "advanced", "expert")

NOT_STARTED = "not_started"
PLAYING = "playing"
COMPLETED = "completed"


@dataclass(frozen=True)
class ScenarioOption:
    identifier: str
    text: str
    impact: ArcImpact
    explanation: str
    learning_points: Tuple[str, ...]
    alternative: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "text": self.text,
            "arc": self.impact.vector.to_payload(),
            "is_optimal": self.impact.is_optimal,
        }


@dataclass(frozen=True)
class Scenario:
    identifier: str
    title: str
    context: str
    category: str
    difficulty: str
    options: Tuple[ScenarioOption, ...]
    learning_objective: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def option(self, option_id: str) -> ScenarioOption:
        for candidate in self.options:
            if candidate.identifier == option_id:
                return candidate
        raise ValidationError(f"Scenario '{self.identifier}' has no option '{option_id}'")

    def to_payload(self) -> Dict[str, object]:
        return {
            "id": self.identifier,
            "title": self.title,
            "context": self.context,
            "category": self.category,
            "difficulty": self.difficulty,
            "learning_objective": self.learning_objective,
            "tags": list(self.tags),
            "options": [option.to_payload() for option in self.options],
        }


class ToneNavigatorGame:
    """Serve authored scenarios and score the responses a player picks."""

    def __init__(
        self,
        *,
        config: Optional[ScoringConfig] = None,
        library: Optional[Mapping[str, Mapping[str, Iterable[Mapping[str, Any]]]]] = None,
    ) -> None:
        self.aggregator = ScoreAggregator(config)
        self.progress = ProgressTracker()
        self._scenarios = load_scenarios(library if library is not None else SCENARIO_LIBRARY)
        self._played: Set[str] = set()
        self._status = NOT_STARTED

    @property
    def state(self) -> SessionState:
        return self.aggregator.state

    @property
    def status(self) -> str:
        return self._status

    def start(self, initial_tone: Optional[int] = None) -> SessionState:
        """Begin a fresh game, optionally at a chosen tone level."""
        state = self.aggregator.init_session(initial_tone)
        self._played.clear()
        self.progress.clear(starting_tone=state.tone_level)
        self._status = PLAYING
        logger.info(f"Game started at tone {state.tone_level} ({state.band.name})")
        return state

    def end(self) -> SessionState:
        self._status = COMPLETED
        state = self.aggregator.state
        logger.info(
            f"Game completed after {state.stats.scenarios_completed} scenarios at tone {state.tone_level}"
        )
        return state

    def categories(self) -> List[str]:
        return list(self._scenarios.keys())

    def available_difficulties(self, category: str) -> Iterable[str]:
        bank = self._scenarios.get(category)
        if bank is None:
            raise ValidationError(f"Unknown scenario category '{category}'")
        return bank.keys()

    def suggest_difficulty(self, tone: Optional[int] = None) -> str:
        level = self.aggregator.tone_level if tone is None else tone
        if level <= 0:
            return "beginner"
        if level < 15:
            return "intermediate"
        if level < 25:
            return "advanced"
        return "expert"

    def prepare_scenario(
        self,
        category: Optional[str] = None,
        *,
        difficulty: Optional[str] = None,
    ) -> Scenario:
        diff = self._normalise_difficulty(difficulty) or self.suggest_difficulty()
        categories = [category] if category else self.categories()
        for name in categories:
            if name not in self._scenarios:
                raise ValidationError(f"Unknown scenario category '{name}'")

        candidates = [
            scenario
            for name in categories
            for scenario in self._scenarios[name].get(self._closest_difficulty(name, diff), [])
        ]
        fresh = [scenario for scenario in candidates if scenario.identifier not in self._played]
        chosen = (fresh or candidates)[0]
        logger.debug(f"Prepared scenario {chosen.identifier} ({chosen.category}/{chosen.difficulty})")
        return chosen

    def choose(self, scenario: Scenario, option_id: str) -> Tuple[Feedback, SessionState]:
        if self._status != PLAYING:
            raise InvariantViolation(f"Cannot respond while the game is {self._status}")
        option = scenario.option(option_id)
        try:
            feedback, state = self.aggregator.respond(
                option.identifier,
                option.impact,
                explanation=option.explanation,
                learning_points=option.learning_points,
                alternative=option.alternative,
            )
        except InvariantViolation:
            logger.exception(f"Rejected response {option_id} for scenario {scenario.identifier}")
            raise

        self._played.add(scenario.identifier)
        self.progress.record(
            feedback,
            scenario_id=scenario.identifier,
            category=scenario.category,
            difficulty=scenario.difficulty,
            score=calculate_total_score(
                feedback.tone_change, feedback.is_optimal, scenario.difficulty, scenario.category
            ),
        )
        logger.info(
            f"Scenario {scenario.identifier}: option {option_id} moved tone to {state.tone_level} "
            f"({state.band.name})"
        )
        return feedback, state

    def reset(self) -> SessionState:
        self._played.clear()
        self.progress.clear()
        self._status = NOT_STARTED
        return self.aggregator.init_session()

    def _closest_difficulty(self, category: str, difficulty: str) -> str:
        bank = self._scenarios[category]
        if difficulty in bank:
            return difficulty
        target = DIFFICULTIES.index(difficulty)
        return min(bank.keys(), key=lambda name: (abs(DIFFICULTIES.index(name) - target), DIFFICULTIES.index(name)))

    def _normalise_difficulty(self, difficulty: Optional[str]) -> Optional[str]:
        if not difficulty:
            return None
        mapping = {
            "auto": None,
            "easy": "beginner",
            "beginner": "beginner",
            "medium": "intermediate",
            "intermediate": "intermediate",
            "hard": "advanced",
            "advanced": "advanced",
            "expert": "expert",
        }
        return mapping.get(difficulty.lower(), None)


def load_scenarios(
    library: Mapping[str, Mapping[str, Iterable[Mapping[str, Any]]]],
) -> Dict[str, Dict[str, List[Scenario]]]:
    """Validate authored content up front; any defect raises ``ValidationError``."""
    scenarios: Dict[str, Dict[str, List[Scenario]]] = {}
    seen: Set[str] = set()
    for category, bank in library.items():
        for difficulty, entries in bank.items():
            if difficulty not in DIFFICULTIES:
                raise ValidationError(f"Unknown difficulty '{difficulty}' in category '{category}'")
            for entry in entries:
                scenario = _build_scenario(entry, category, difficulty)
                if scenario.identifier in seen:
                    raise ValidationError(f"Duplicate scenario id '{scenario.identifier}'")
                seen.add(scenario.identifier)
                scenarios.setdefault(category, {}).setdefault(difficulty, []).append(scenario)
    if not scenarios:
        raise ValidationError("Scenario library is empty")
    return scenarios


def _build_scenario(entry: Mapping[str, Any], category: str, difficulty: str) -> Scenario:
    identifier = entry.get("id")
    if not identifier:
        raise ValidationError(f"Scenario in '{category}/{difficulty}' has no id")
    options = tuple(_build_option(item, identifier) for item in entry.get("options", []))
    if len(options) < 2:
        raise ValidationError(f"Scenario '{identifier}' needs at least two options")
    if len({option.identifier for option in options}) != len(options):
        raise ValidationError(f"Scenario '{identifier}' repeats an option id")
    if not any(option.impact.is_optimal for option in options):
        raise ValidationError(f"Scenario '{identifier}' has no optimal option")
    return Scenario(
        identifier=identifier,
        title=entry.get("title", identifier),
        context=entry.get("context", ""),
        category=category,
        difficulty=difficulty,
        options=options,
        learning_objective=entry.get("learning_objective"),
        tags=tuple(entry.get("tags", [])),
    )


def _build_option(item: Mapping[str, Any], scenario_id: str) -> ScenarioOption:
    identifier = item.get("id")
    if not identifier:
        raise ValidationError(f"Scenario '{scenario_id}' has an option without an id")
    impact = calculate_arc_impact(item.get("arc"))
    explanation = item.get("explanation") or ""
    learning_points = tuple(item.get("learning_points") or [])
    if any(not isinstance(point, str) or not point.strip() for point in learning_points):
        raise ValidationError(f"Option '{identifier}' in '{scenario_id}' has a blank learning point")
    alternative = item.get("alternative")
    if alternative is not None and not alternative.strip():
        raise ValidationError(f"Option '{identifier}' in '{scenario_id}' has a blank alternative")
    if not explanation.strip():
        raise ValidationError(f"Option '{identifier}' in '{scenario_id}' has no explanation")
    if not learning_points:
        raise ValidationError(f"Option '{identifier}' in '{scenario_id}' has no learning points")
    if impact.is_optimal and alternative:
        raise ValidationError(f"Optimal option '{identifier}' in '{scenario_id}' carries an alternative")
    if not impact.is_optimal and not alternative:
        raise ValidationError(f"Non-optimal option '{identifier}' in '{scenario_id}' needs an alternative")
    return ScenarioOption(
        identifier=identifier,
        text=item.get("text", ""),
        impact=impact,
        explanation=explanation,
        learning_points=learning_points,
        alternative=alternative,
    )


__all__ = [
    "COMPLETED",
    "DIFFICULTIES",
    "NOT_STARTED",
    "PLAYING",
    "Scenario",
    "ScenarioOption",
    "ToneNavigatorGame",
    "load_scenarios",
]
