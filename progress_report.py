"""progress_report.py
Host-side response history and the progress summaries built from it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from feedback import Feedback

logger = logging.getLogger(__name__)

COLUMNS = (
    "timestamp",
    "scenario_id",
    "category",
    "difficulty",
    "option_id",
    "is_optimal",
    "tone_change",
    "tone_level",
    "appreciation",
    "reality",
    "communication",
    "score",
)


class ProgressTracker:
    """Keep every feedback record of a session for trend and category analysis."""

    def __init__(self, starting_tone: Optional[int] = None) -> None:
        self._rows: List[Dict[str, Any]] = []
        self.starting_tone = starting_tone

    def __len__(self) -> int:
        return len(self._rows)

    def record(
        self,
        feedback: Feedback,
        *,
        scenario_id: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        score: Optional[int] = None,
    ) -> None:
        self._rows.append(
            {
                "timestamp": feedback.timestamp,
                "scenario_id": scenario_id,
                "category": category,
                "difficulty": difficulty,
                "option_id": feedback.selected_option_id,
                "is_optimal": feedback.is_optimal,
                "tone_change": feedback.tone_change,
                "tone_level": feedback.new_tone_level,
                "appreciation": feedback.arc_impact.appreciation,
                "reality": feedback.arc_impact.reality,
                "communication": feedback.arc_impact.communication,
                "score": score if score is not None else 0,
            }
        )

    def clear(self, starting_tone: Optional[int] = None) -> None:
        self._rows.clear()
        self.starting_tone = starting_tone

    def tone_history(self) -> List[int]:
        """Tone after each response, led by the starting tone when one is known."""
        levels = [row["tone_level"] for row in self._rows]
        return levels if self.starting_tone is None else [self.starting_tone, *levels]

    def to_frame(self) -> pd.DataFrame:
        if not self._rows:
            return pd.DataFrame(columns=list(COLUMNS))
        df = pd.DataFrame(self._rows, columns=list(COLUMNS))
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce")
        return df

    def summary(self) -> Dict[str, Any]:
        df = self.to_frame()
        if df.empty:
            return {
                "responses": 0,
                "average_tone": 0.0,
                "best_tone": None,
                "worst_tone": None,
                "optimal_ratio": 0.0,
                "total_score": 0,
                "tone_trend": 0.0,
                "arc_totals": {"appreciation": 0, "reality": 0, "communication": 0},
                "by_category": {},
            }

        summary = {
            "responses": int(len(df)),
            "average_tone": round(float(df["tone_level"].mean()), 2),
            "best_tone": int(df["tone_level"].max()),
            "worst_tone": int(df["tone_level"].min()),
            "optimal_ratio": round(float(df["is_optimal"].astype(float).mean()), 3),
            "total_score": int(df["score"].sum()),
            "tone_trend": self._tone_trend(df),
            "arc_totals": {
                name: int(df[name].sum()) for name in ("appreciation", "reality", "communication")
            },
            "by_category": self._category_breakdown(df),
        }
        logger.debug(f"Built progress summary over {summary['responses']} responses")
        return summary

    @staticmethod
    def _tone_trend(df: pd.DataFrame) -> float:
        """Least-squares slope of tone level per response."""
        if len(df) < 2:
            return 0.0
        positions = np.arange(len(df), dtype=float)
        levels = df["tone_level"].to_numpy(dtype=float)
        slope = np.polyfit(positions, levels, 1)[0]
        return round(float(slope), 3)

    @staticmethod
    def _category_breakdown(df: pd.DataFrame) -> Dict[str, Dict[str, float]]:
        labelled = df.dropna(subset=["category"])
        if labelled.empty:
            return {}
        grouped = labelled.groupby("category").agg(
            responses=("option_id", "size"),
            average_tone_change=("tone_change", "mean"),
            optimal_ratio=("is_optimal", "mean"),
        )
        return {
            str(category): {
                "responses": int(row["responses"]),
                "average_tone_change": round(float(row["average_tone_change"]), 2),
                "optimal_ratio": round(float(row["optimal_ratio"]), 3),
            }
            for category, row in grouped.iterrows()
        }


__all__ = ["ProgressTracker"]
