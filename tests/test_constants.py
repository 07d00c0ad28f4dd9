import pytest

from valence.constants import STANDARD_TPS, ticks_to_seconds


def test_one_second_of_standard_ticks():
    assert ticks_to_seconds(STANDARD_TPS) == 1.0


def test_default_rate_is_standard():
    assert ticks_to_seconds(137) == ticks_to_seconds(137, STANDARD_TPS)


@pytest.mark.parametrize("rate", [1, 10, 20, 60])
@pytest.mark.parametrize("seconds", [0, 1, 3, 25])
def test_whole_seconds_round_trip(rate, seconds):
    assert ticks_to_seconds(seconds * rate, rate) == seconds


def test_zero_ticks_is_zero_seconds():
    assert ticks_to_seconds(0, 7) == 0


def test_half_of_rate_is_half_second():
    assert ticks_to_seconds(STANDARD_TPS // 2) == 0.5


@pytest.mark.parametrize("rate", [0, -1, -20])
def test_non_positive_rate_rejected(rate):
    with pytest.raises(ValueError):
        ticks_to_seconds(10, rate)