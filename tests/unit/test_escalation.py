import pytest

from agents.escalation import HintLevel, next_hint_level


@pytest.mark.parametrize(
    "count, expected",
    [
        (0, HintLevel.NUDGE),
        (1, HintLevel.GUIDE),
        (2, HintLevel.DIRECTION),
        (3, HintLevel.DIRECTION),
        (100, HintLevel.DIRECTION),
    ],
)
def test_level_for_prior_count(count, expected):
    assert next_hint_level(count) is expected


def test_levels_never_decrease():
    levels = [next_hint_level(n) for n in range(10)]
    for current, following in zip(levels, levels[1:]):
        assert current <= following


def test_level_ordering():
    assert HintLevel.NUDGE < HintLevel.GUIDE < HintLevel.DIRECTION
    assert HintLevel.DIRECTION >= HintLevel.GUIDE
    assert max([HintLevel.GUIDE, HintLevel.NUDGE]) is HintLevel.GUIDE


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        next_hint_level(-1)


def test_level_values_match_stored_names():
    assert [level.value for level in HintLevel] == ["nudge", "guide", "direction"]
