from datetime import datetime

import pytest

from arc_calculator import calculate_arc_impact
from errors import ValidationError
from feedback import build_feedback

OPTIMAL = calculate_arc_impact({"appreciation": 1, "reality": 1, "communication": 1})
NON_OPTIMAL = calculate_arc_impact({"appreciation": -1, "reality": 0, "communication": -1})


def test_builds_complete_record():
    stamp = datetime(2024, 1, 1, 12, 0)
    feedback = build_feedback(
        next_tone=3,
        option_id="greet",
        impact=OPTIMAL,
        explanation="Warm greetings invite conversation.",
        learning_points=["Say hello first.", "Ask a question."],
        timestamp=stamp,
    )
    assert feedback.selected_option_id == "greet"
    assert feedback.is_optimal is True
    assert feedback.tone_change == 3
    assert feedback.new_tone_level == 3
    assert feedback.arc_impact == OPTIMAL.vector
    assert feedback.learning_points == ("Say hello first.", "Ask a question.")
    assert feedback.alternative is None
    assert feedback.timestamp == stamp
    assert feedback.to_payload()["timestamp"] == "2024-01-01T12:00:00"


def test_record_is_immutable():
    feedback = build_feedback(
        next_tone=3, option_id="greet", impact=OPTIMAL, explanation="Ok.", learning_points=["x"]
    )
    with pytest.raises(AttributeError):
        feedback.tone_change = 10


def test_non_optimal_keeps_alternative():
    feedback = build_feedback(
        next_tone=-2,
        option_id="ignore",
        impact=NON_OPTIMAL,
        explanation="Ignoring people lowers the mood.",
        learning_points=["Acknowledge others."],
        alternative="Say good morning.",
    )
    assert feedback.is_optimal is False
    assert feedback.alternative == "Say good morning."
    assert feedback.timestamp is not None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"impact": OPTIMAL, "alternative": "Something else."},
        {"impact": NON_OPTIMAL, "alternative": None},
        {"impact": NON_OPTIMAL, "alternative": "   "},
        {"impact": OPTIMAL, "alternative": "   "},
        {"impact": OPTIMAL, "learning_points": ["Point.", "  "]},
        {"impact": OPTIMAL, "learning_points": ["Point.", None]},
        {"impact": OPTIMAL, "learning_points": []},
        {"impact": OPTIMAL, "explanation": ""},
        {"impact": OPTIMAL, "option_id": ""},
    ],
)
def test_preconditions_raise(kwargs):
    arguments = {
        "next_tone": 0,
        "option_id": "opt",
        "explanation": "Because.",
        "learning_points": ["Point."],
    }
    arguments.update(kwargs)
    with pytest.raises(ValidationError):
        build_feedback(**arguments)


def test_turn_is_carried_into_payload():
    feedback = build_feedback(
        next_tone=3, option_id="greet", impact=OPTIMAL, explanation="Ok.", learning_points=["x"], turn=4
    )
    assert feedback.turn == 4
    assert feedback.to_payload()["turn"] == 4
