"""scoring.py
Points, streak bonuses and achievement milestones derived from session stats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from score_aggregator import SessionStats

DIFFICULTY_MULTIPLIERS: Dict[str, float] = {
    "beginner": 1.0,
    "intermediate": 1.2,
    "advanced": 1.5,
    "expert": 2.0,
}

CATEGORY_BONUSES: Dict[str, int] = {
    "workplace": 10,
    "family": 8,
    "friends": 6,
    "general": 5,
}


def difficulty_multiplier(difficulty: str) -> float:
    return DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0)


def category_bonus(category: str) -> int:
    return CATEGORY_BONUSES.get(category, 0)


def calculate_response_score(tone_impact: int, is_optimal: bool, difficulty: str) -> int:
    base = 100 if is_optimal else 30
    tone_bonus = min(abs(tone_impact) * 10, 50)
    return round(base * difficulty_multiplier(difficulty) + tone_bonus)


def calculate_total_score(tone_impact: int, is_optimal: bool, difficulty: str, category: str) -> int:
    return calculate_response_score(tone_impact, is_optimal, difficulty) + category_bonus(category)


def calculate_streak_bonus(streak: int) -> int:
    if streak <= 0:
        return 0
    if streak < 3:
        return streak * 5
    if streak < 7:
        return 15 + (streak - 3) * 5
    return 35 + (streak - 7) * 10


def streak_multiplier(streak: int) -> float:
    if streak <= 0:
        return 1.0
    if streak < 3:
        return round(1 + streak * 0.1, 2)
    if streak < 7:
        return round(1.3 + (streak - 3) * 0.1, 2)
    return round(1.7 + (streak - 7) * 0.15, 2)


def calculate_achievement_points(scenarios_completed: int, best_tone: int, current_streak: int) -> int:
    points = scenarios_completed * 10
    if best_tone > 0:
        points += best_tone * 5
    return points + calculate_streak_bonus(current_streak)


def response_quality_rating(tone_change: int, is_optimal: bool) -> str:
    if not is_optimal:
        return "Poor"
    if tone_change >= 5:
        return "Excellent"
    if tone_change >= 3:
        return "Great"
    if tone_change >= 1:
        return "Good"
    return "Average"


def calculate_eq_improvement(is_optimal: bool, tone_change: int) -> float:
    if not is_optimal:
        return 0.0
    improvement = 2.0
    if tone_change > 0:
        improvement += min(tone_change * 0.5, 3.0)
    return round(improvement, 1)


@dataclass(frozen=True)
class Achievement:
    identifier: str
    name: str
    description: str
    points: int
    condition: Callable[[SessionStats], bool]

    def to_payload(self, stats: SessionStats) -> Dict[str, str | int | bool]:
        return {
            "id": self.identifier,
            "name": self.name,
            "description": self.description,
            "points": self.points,
            "unlocked": self.condition(stats),
        }


def _responses_at_least(count: int) -> Callable[[SessionStats], bool]:
    return lambda stats: stats.scenarios_completed >= count


def _streak_at_least(count: int) -> Callable[[SessionStats], bool]:
    return lambda stats: stats.best_streak >= count


def _tone_at_least(level: int) -> Callable[[SessionStats], bool]:
    return lambda stats: stats.best_tone_level >= level


ACHIEVEMENTS: Tuple[Achievement, ...] = (
    Achievement("first_response", "First Response", "Make your first response", 10, _responses_at_least(1)),
    Achievement("five_responses", "Getting Started", "Make 5 responses", 25, _responses_at_least(5)),
    Achievement("ten_responses", "Regular Player", "Make 10 responses", 50, _responses_at_least(10)),
    Achievement("twenty_responses", "Dedicated Learner", "Make 20 responses", 100, _responses_at_least(20)),
    Achievement("positive_streak_3", "On a Roll", "Achieve a 3-response positive streak", 30, _streak_at_least(3)),
    Achievement("positive_streak_5", "Hot Streak", "Achieve a 5-response positive streak", 50, _streak_at_least(5)),
    Achievement("positive_streak_10", "Unstoppable", "Achieve a 10-response positive streak", 100, _streak_at_least(10)),
    Achievement("tone_10", "Cheerful", "Reach tone level +10", 50, _tone_at_least(10)),
    Achievement("tone_15", "Gay", "Reach tone level +15", 75, _tone_at_least(15)),
    Achievement("tone_20", "Mastery", "Reach tone level +20", 100, _tone_at_least(20)),
    Achievement("tone_30", "Ecstatic", "Reach tone level +30", 200, _tone_at_least(30)),
    Achievement("scenarios_25", "Experienced Player", "Complete 25 scenarios", 100, _responses_at_least(25)),
    Achievement("scenarios_50", "Veteran Player", "Complete 50 scenarios", 200, _responses_at_least(50)),
)


def unlocked_achievements(stats: SessionStats) -> List[Achievement]:
    return [achievement for achievement in ACHIEVEMENTS if achievement.condition(stats)]


def total_achievement_points(stats: SessionStats) -> int:
    return sum(achievement.points for achievement in unlocked_achievements(stats))


__all__ = [
    "ACHIEVEMENTS",
    "Achievement",
    "CATEGORY_BONUSES",
    "DIFFICULTY_MULTIPLIERS",
    "calculate_achievement_points",
    "calculate_eq_improvement",
    "calculate_response_score",
    "calculate_streak_bonus",
    "calculate_total_score",
    "category_bonus",
    "difficulty_multiplier",
    "response_quality_rating",
    "streak_multiplier",
    "total_achievement_points",
    "unlocked_achievements",
]
