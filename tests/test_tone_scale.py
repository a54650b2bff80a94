import pytest

from tone_scale import (
    GREEN,
    LIGHT_GREEN,
    ORANGE,
    RED,
    YELLOW,
    band_of,
    calculate_tone_change,
    clamp_tone,
    gradient_stops,
    is_negative_tone,
    is_neutral_tone,
    is_positive_tone,
    levels_in_range,
    tone_category,
    tone_percentage,
    tone_range,
)


@pytest.mark.parametrize(
    "tone, tier",
    [
        (40, GREEN),
        (15, GREEN),
        (14, LIGHT_GREEN),
        (5, LIGHT_GREEN),
        (4, YELLOW),
        (0, YELLOW),
        (-1, ORANGE),
        (-9, ORANGE),
        (-10, ORANGE),
        (-11, RED),
        (-40, RED),
    ],
)
def test_color_tier_thresholds(tone, tier):
    assert band_of(tone).color_tier == tier


def test_boundaries_change_tier():
    assert band_of(15).color_tier != band_of(14).color_tier
    assert band_of(-10).color_tier != band_of(-11).color_tier


def test_band_names_at_extremes():
    assert band_of(40).name == "Serenity of Beingness"
    assert band_of(-40).name == "Total Failure"
    assert band_of(0).name == "Neutrality"


def test_band_uses_nearest_anchor_with_lower_tie():
    assert band_of(11).name == "Cheerful"
    assert band_of(35).name == "Ecstatic"
    assert band_of(-38).name == "Total Failure"


def test_band_is_pure():
    assert band_of(7) == band_of(7)


def test_clamp_tone():
    assert clamp_tone(45) == 40
    assert clamp_tone(-45) == -40
    assert clamp_tone(12) == 12


def test_tone_percentage():
    assert tone_percentage(-40) == 0.0
    assert tone_percentage(0) == 50.0
    assert tone_percentage(10) == 62.5
    assert tone_percentage(99) == 100.0


def test_sign_helpers_and_category():
    assert is_positive_tone(1) and not is_positive_tone(0)
    assert is_negative_tone(-1) and not is_negative_tone(0)
    assert is_neutral_tone(0)
    assert tone_category(-5) == "mental"
    assert tone_category(0) == "neutral"
    assert tone_category(20) == "emotional"


def test_range_helpers():
    assert tone_range() == {"min": -40, "max": 40}
    assert calculate_tone_change(2, 5) == 3
    assert [level.value for level in levels_in_range(0, 10)] == [0, 5, 10]
    stops = gradient_stops()
    assert stops[0]["position"] == 0.0
    assert stops[-1]["position"] == 100.0
