"""score_aggregator.py
Session state machine: tone level, EQ sub-scores and streak statistics."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple

from arc_calculator import ArcImpact
from errors import InvariantViolation, ValidationError
from feedback import Feedback, build_feedback
from scoring_config import EQ_KEYS, ScoringConfig
from tone_scale import MAX_TONE, MIN_TONE, ToneBand, band_of, clamp_tone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EQScores:
    self_awareness: int
    self_regulation: int
    motivation: int
    empathy: int
    social_skills: int

    @classmethod
    def baseline(cls, value: int) -> "EQScores":
        return cls(**{key: value for key in EQ_KEYS})

    def to_payload(self) -> Dict[str, int]:
        return {key: getattr(self, key) for key in EQ_KEYS}


@dataclass(frozen=True)
class SessionStats:
    scenarios_completed: int = 0
    current_streak: int = 0
    best_streak: int = 0
    best_tone_level: int = 0
    optimal_responses: int = 0
    non_optimal_responses: int = 0

    def to_payload(self) -> Dict[str, int]:
        return {
            "scenarios_completed": self.scenarios_completed,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "best_tone_level": self.best_tone_level,
            "optimal_responses": self.optimal_responses,
            "non_optimal_responses": self.non_optimal_responses,
        }


@dataclass(frozen=True)
class SessionState:
    tone_level: int
    eq_scores: EQScores
    stats: SessionStats

    @property
    def band(self) -> ToneBand:
        return band_of(self.tone_level)

    def to_payload(self) -> Dict[str, object]:
        return {
            "tone_level": self.tone_level,
            "band": self.band.to_payload(),
            "eq_scores": self.eq_scores.to_payload(),
            "stats": self.stats.to_payload(),
        }


class ScoreAggregator:
    """Owns one session's tone level, EQ scores and stats.

    Every mutation swaps in a new immutable ``SessionState`` under a lock, so
    a rejected call leaves the previous snapshot in place.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()
        self._lock = threading.RLock()
        self._turn = 0
        self._state = self._fresh_state(self.config.starting_tone)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def tone_level(self) -> int:
        return self._state.tone_level

    @property
    def eq_scores(self) -> EQScores:
        return self._state.eq_scores

    @property
    def stats(self) -> SessionStats:
        return self._state.stats

    @property
    def band(self) -> ToneBand:
        return self._state.band

    @property
    def turn(self) -> int:
        """Counter that advances on every applied feedback and every new session."""
        return self._turn

    def init_session(self, starting_tone: Optional[int] = None) -> SessionState:
        tone = self.config.starting_tone if starting_tone is None else _checked_tone(starting_tone)
        with self._lock:
            self._turn += 1
            self._state = self._fresh_state(tone)
            logger.info(
                f"Started session at tone {self._state.tone_level} with EQ baseline {self.config.eq_baseline}"
            )
            return self._state

    def compute_next_tone(self, impact: ArcImpact | int) -> int:
        """Clamped tone level that applying ``impact`` would produce."""
        change = impact.total if isinstance(impact, ArcImpact) else impact
        with self._lock:
            return clamp_tone(self._state.tone_level + change)

    def apply(self, feedback: Feedback) -> SessionState:
        with self._lock:
            current = self._state
            next_tone = self._validated_next_tone(current, feedback)

            streak = current.stats.current_streak + 1 if feedback.is_optimal else 0
            stats = SessionStats(
                scenarios_completed=current.stats.scenarios_completed + 1,
                current_streak=streak,
                best_streak=max(current.stats.best_streak, streak),
                best_tone_level=max(current.stats.best_tone_level, next_tone),
                optimal_responses=current.stats.optimal_responses + (1 if feedback.is_optimal else 0),
                non_optimal_responses=current.stats.non_optimal_responses + (0 if feedback.is_optimal else 1),
            )
            updated = SessionState(
                tone_level=next_tone,
                eq_scores=self._next_eq_scores(current.eq_scores, feedback),
                stats=stats,
            )
            self._state = updated
            self._turn += 1
            logger.debug(
                f"Applied option {feedback.selected_option_id}: tone {current.tone_level} -> {next_tone}, "
                f"streak {streak}, completed {stats.scenarios_completed}"
            )
            return updated

    def respond(
        self,
        option_id: str,
        impact: ArcImpact,
        *,
        explanation: str,
        learning_points: Iterable[str],
        alternative: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Tuple[Feedback, SessionState]:
        """Compute the next tone, build the feedback and apply it in one step."""
        with self._lock:
            feedback = build_feedback(
                next_tone=self.compute_next_tone(impact),
                option_id=option_id,
                impact=impact,
                explanation=explanation,
                learning_points=learning_points,
                alternative=alternative,
                timestamp=timestamp,
                turn=self._turn,
            )
            return feedback, self.apply(feedback)

    def _fresh_state(self, tone: int) -> SessionState:
        return SessionState(
            tone_level=tone,
            eq_scores=EQScores.baseline(self.config.eq_baseline),
            stats=SessionStats(best_tone_level=tone),
        )

    def _validated_next_tone(self, current: SessionState, feedback: Feedback) -> int:
        change = getattr(feedback, "tone_change", None)
        if isinstance(change, bool) or not isinstance(change, int):
            raise InvariantViolation(f"Feedback tone_change must be an integer, got {change!r}")
        arc = getattr(feedback, "arc_impact", None)
        if arc is None:
            raise InvariantViolation("Feedback is missing its ARC impact")
        if change != arc.total:
            raise InvariantViolation(
                f"Feedback tone_change {change} does not match ARC total {arc.total}"
            )
        if feedback.is_optimal != (arc.total > 0):
            raise InvariantViolation(
                f"Feedback is_optimal={feedback.is_optimal} disagrees with ARC total {arc.total}"
            )
        if feedback.turn != self._turn:
            raise InvariantViolation(
                f"Stale feedback for option {feedback.selected_option_id}: built on turn "
                f"{feedback.turn}, session is on turn {self._turn}"
            )
        next_tone = clamp_tone(current.tone_level + change)
        if feedback.new_tone_level != next_tone:
            raise InvariantViolation(
                f"Stale feedback for option {feedback.selected_option_id}: carries tone "
                f"{feedback.new_tone_level}, session would move to {next_tone}"
            )
        return next_tone

    def _next_eq_scores(self, scores: EQScores, feedback: Feedback) -> EQScores:
        deltas = self.config.eq_deltas(feedback.arc_impact.to_payload())
        return EQScores(
            **{
                key: max(0, min(100, int(round(getattr(scores, key) + deltas[key]))))
                for key in EQ_KEYS
            }
        )


def _checked_tone(tone: int) -> int:
    if isinstance(tone, bool) or not isinstance(tone, int):
        raise ValidationError(f"Starting tone must be an integer, got {tone!r}")
    if not MIN_TONE <= tone <= MAX_TONE:
        raise ValidationError(f"Starting tone must be within [{MIN_TONE}, {MAX_TONE}], got {tone}")
    return tone


__all__ = ["EQScores", "ScoreAggregator", "SessionState", "SessionStats"]
