import pytest

from arc_calculator import calculate_arc_impact
from score_aggregator import ScoreAggregator


@pytest.fixture
def aggregator():
    return ScoreAggregator()


@pytest.fixture
def submit(aggregator):
    """Run one response through the compute-then-build protocol."""

    def _submit(appreciation, reality, communication, option_id="opt"):
        impact = calculate_arc_impact(
            {"appreciation": appreciation, "reality": reality, "communication": communication}
        )
        alternative = None if impact.is_optimal else "Try a warmer reply."
        _, state = aggregator.respond(
            option_id,
            impact,
            explanation="Because.",
            learning_points=["Listen first."],
            alternative=alternative,
        )
        return state

    return _submit
