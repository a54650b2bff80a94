import random
import threading
from dataclasses import replace

import pytest

from arc_calculator import ARCVector, calculate_arc_impact
from errors import InvariantViolation, ValidationError
from feedback import build_feedback
from score_aggregator import EQScores, ScoreAggregator, SessionStats
from scoring_config import EQ_KEYS, ScoringConfig


def _feedback(aggregator, vector, option_id="opt"):
    impact = calculate_arc_impact(vector)
    return build_feedback(
        next_tone=aggregator.compute_next_tone(impact),
        option_id=option_id,
        impact=impact,
        explanation="Because.",
        learning_points=["Point."],
        alternative=None if impact.is_optimal else "Do better.",
        turn=aggregator.turn,
    )


def test_init_session_defaults(aggregator):
    state = aggregator.init_session()
    assert state.tone_level == 0
    assert state.eq_scores == EQScores.baseline(50)
    assert state.stats == SessionStats()


def test_optimal_then_non_optimal_scenario(aggregator, submit):
    state = submit(1, 1, 1)
    assert state.tone_level == 3
    assert state.stats.current_streak == 1
    assert state.stats.best_streak == 1
    assert state.stats.scenarios_completed == 1
    assert state.stats.best_tone_level == 3

    state = submit(-1, 0, -1)
    assert state.tone_level == 1
    assert state.stats.current_streak == 0
    assert state.stats.best_streak == 1
    assert state.stats.scenarios_completed == 2
    assert state.stats.best_tone_level == 3
    assert state.stats.optimal_responses == 1
    assert state.stats.non_optimal_responses == 1


def test_tone_clamps_at_top(aggregator, submit):
    for _ in range(4):
        submit(4, 4, 3)
    assert aggregator.tone_level == 40
    assert aggregator.stats.best_tone_level == 40


def test_tone_clamps_at_bottom(aggregator, submit):
    for _ in range(4):
        submit(-4, -4, -3)
    state = submit(-1, -1, -1)
    assert state.tone_level == -40
    assert state.stats.best_tone_level == 0


def test_single_jump_past_bound_clamps():
    aggregator = ScoreAggregator(ScoringConfig(starting_tone=35))
    feedback = _feedback(aggregator, {"appreciation": 4, "reality": 3, "communication": 3})
    assert feedback.new_tone_level == 40
    assert aggregator.apply(feedback).tone_level == 40


def test_random_sequences_keep_invariants(aggregator):
    rng = random.Random(7)
    previous = aggregator.state
    for step in range(300):
        vector = {name: rng.randint(-5, 5) for name in ("appreciation", "reality", "communication")}
        feedback = _feedback(aggregator, vector, option_id=f"opt-{step}")
        state = aggregator.apply(feedback)

        assert -40 <= state.tone_level <= 40
        for key in EQ_KEYS:
            assert 0 <= getattr(state.eq_scores, key) <= 100
        assert state.stats.best_tone_level >= previous.stats.best_tone_level
        assert state.stats.best_streak >= previous.stats.best_streak
        assert state.stats.best_streak >= state.stats.current_streak
        assert state.stats.scenarios_completed == previous.stats.scenarios_completed + 1
        if not feedback.is_optimal:
            assert state.stats.current_streak == 0
        previous = state


def test_eq_scores_follow_weights(aggregator, submit):
    state = submit(2, 0, 0)
    assert state.eq_scores.empathy == 52
    assert state.eq_scores.self_awareness == 51
    assert state.eq_scores.social_skills == 50

    state = submit(0, 0, 4)
    assert state.eq_scores.social_skills == 54
    assert state.eq_scores.empathy == 53


def test_custom_weight_table():
    config = ScoringConfig(eq_weights={"communication": {"motivation": 10.0}})
    aggregator = ScoreAggregator(config)
    aggregator.apply(_feedback(aggregator, {"appreciation": 0, "reality": 0, "communication": 8}))
    assert aggregator.eq_scores.motivation == 100
    assert aggregator.eq_scores.empathy == 50


def test_stale_feedback_rejected_and_state_untouched(aggregator):
    feedback = _feedback(aggregator, {"appreciation": 1, "reality": 1, "communication": 1})
    aggregator.apply(feedback)
    before = aggregator.state
    with pytest.raises(InvariantViolation):
        aggregator.apply(feedback)
    assert aggregator.state is before


@pytest.mark.parametrize(
    "changes",
    [
        {"tone_change": None},
        {"tone_change": 2.5},
        {"tone_change": 5},
        {"is_optimal": False},
        {"arc_impact": ARCVector(0, 0, 0)},
        {"turn": None},
    ],
)
def test_malformed_feedback_raises(aggregator, changes):
    feedback = _feedback(aggregator, {"appreciation": 1, "reality": 1, "communication": 1})
    before = aggregator.state
    with pytest.raises(InvariantViolation):
        aggregator.apply(replace(feedback, **changes))
    assert aggregator.state is before


def test_accessors_are_idempotent(aggregator, submit):
    submit(1, 2, 0)
    assert aggregator.state == aggregator.state
    assert aggregator.tone_level == aggregator.tone_level
    assert aggregator.eq_scores == aggregator.eq_scores
    assert aggregator.stats == aggregator.stats
    assert aggregator.band == aggregator.band


def test_init_session_resets(aggregator, submit):
    submit(3, 3, 3)
    state = aggregator.init_session()
    assert state.tone_level == 0
    assert state.stats.scenarios_completed == 0
    assert state.eq_scores == EQScores.baseline(50)


def test_payload_includes_band(aggregator, submit):
    payload = submit(5, 5, 5).to_payload()
    assert payload["tone_level"] == 15
    assert payload["band"]["color_tier"] == "green"
    assert payload["stats"]["current_streak"] == 1


def test_concurrent_double_submit_applies_once(aggregator):
    feedback = _feedback(aggregator, {"appreciation": 1, "reality": 1, "communication": 1})
    errors = []

    def worker():
        try:
            aggregator.apply(feedback)
        except InvariantViolation as error:
            errors.append(error)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert aggregator.stats.scenarios_completed == 1
    assert aggregator.tone_level == 3
    assert len(errors) == 7


@pytest.mark.parametrize(
    "starting_tone, vector",
    [
        (40, {"appreciation": 1, "reality": 1, "communication": 1}),
        (-40, {"appreciation": -1, "reality": -1, "communication": -1}),
        (0, {"appreciation": 1, "reality": -1, "communication": 0}),
    ],
)
def test_repeat_submit_rejected_when_tone_does_not_move(starting_tone, vector):
    aggregator = ScoreAggregator(ScoringConfig(starting_tone=starting_tone))
    feedback = _feedback(aggregator, vector)
    state = aggregator.apply(feedback)
    assert state.tone_level == feedback.new_tone_level == aggregator.compute_next_tone(feedback.tone_change)

    with pytest.raises(InvariantViolation):
        aggregator.apply(feedback)
    assert aggregator.state is state
    assert aggregator.stats.scenarios_completed == 1
    assert aggregator.stats.optimal_responses + aggregator.stats.non_optimal_responses == 1


def test_feedback_from_previous_session_is_stale(aggregator):
    feedback = _feedback(aggregator, {"appreciation": 1, "reality": 0, "communication": 0})
    aggregator.init_session()
    with pytest.raises(InvariantViolation):
        aggregator.apply(feedback)
    assert aggregator.stats.scenarios_completed == 0


def test_turn_advances_once_per_apply(aggregator, submit):
    start = aggregator.turn
    submit(1, 1, 1)
    submit(-1, 0, -1)
    assert aggregator.turn == start + 2


def test_init_session_at_chosen_tone(aggregator):
    state = aggregator.init_session(12)
    assert state.tone_level == 12
    assert state.stats.best_tone_level == 12
    assert aggregator.init_session().tone_level == 0


@pytest.mark.parametrize("tone", [41, -41, "5", 2.5, True])
def test_init_session_rejects_bad_tone(aggregator, tone):
    with pytest.raises(ValidationError):
        aggregator.init_session(tone)
    assert aggregator.tone_level == 0
