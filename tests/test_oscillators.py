import pytest

from pinelet.ta.oscillators import cci, cmo, linreg, mom, roc, rsi
from pinelet.values import NA, PineTypeError


class FakeInterp:
    """Serves a fixed history, newest value first."""

    def __init__(self, values):
        self.values = values
        self.requested = []

    def get_series_values(self, source, length):
        self.requested.append(length)
        return list(self.values[:length])


RISING = [5.0, 4.0, 3.0, 2.0, 1.0]
FALLING = [1.0, 2.0, 3.0, 4.0, 5.0]
FLAT = [3.0, 3.0, 3.0, 3.0]


@pytest.mark.parametrize("func", [rsi, cci, cmo, linreg])
def test_zero_length_rejected(func):
    with pytest.raises(PineTypeError):
        func(FakeInterp(RISING), "src", 0)


def test_rsi_requests_one_extra_value():
    interp = FakeInterp(RISING)
    rsi(interp, "src", 3)
    assert interp.requested == [4]


def test_rsi_needs_two_values():
    assert rsi(FakeInterp([1.0]), "src", 3) is NA


def test_rsi_without_losses_is_hundred():
    assert rsi(FakeInterp(RISING), "src", 4) == 100.0
    assert rsi(FakeInterp(FLAT), "src", 3) == 100.0


def test_rsi_stays_in_range():
    value = rsi(FakeInterp([3.0, 5.0, 2.0, 4.0, 1.0]), "src", 4)
    assert 0.0 <= value <= 100.0
    assert rsi(FakeInterp(FALLING), "src", 4) == pytest.approx(0.0)


def test_cci_flat_is_na_and_sign_follows_current():
    assert cci(FakeInterp(FLAT), "src", 4) is NA
    assert cci(FakeInterp(RISING), "src", 5) > 0
    assert cci(FakeInterp(FALLING), "src", 5) < 0


def test_mom_and_roc_on_flat_history():
    assert mom(FakeInterp(FLAT), "src", 2) == 0.0
    assert roc(FakeInterp(FLAT), "src", 2) == 0.0


def test_mom_zero_length_compares_current_with_itself():
    assert mom(FakeInterp(RISING), "src", 0) == 0.0


def test_mom_and_roc_short_history_is_na():
    assert mom(FakeInterp([1.0, 2.0]), "src", 5) is NA
    assert roc(FakeInterp([1.0, 2.0]), "src", 5) is NA


def test_roc_previous_zero_is_na():
    assert roc(FakeInterp([5.0, 0.0]), "src", 1) is NA


def test_mom_sign_follows_direction():
    assert mom(FakeInterp(RISING), "src", 3) > 0
    assert mom(FakeInterp(FALLING), "src", 3) < 0


def test_cmo_extremes_and_flat():
    assert cmo(FakeInterp(RISING), "src", 4) == 100.0
    assert cmo(FakeInterp(FALLING), "src", 4) == -100.0
    assert cmo(FakeInterp(FLAT), "src", 3) == 0.0
    assert cmo(FakeInterp([1.0]), "src", 3) is NA


def test_linreg_on_straight_line_reproduces_points():
    line = [10.0, 8.0, 6.0, 4.0]
    assert linreg(FakeInterp(line), "src", 4) == pytest.approx(10.0)
    assert linreg(FakeInterp(line), "src", 4, 1) == pytest.approx(8.0)
    assert linreg(FakeInterp(line), "src", 4, 3) == pytest.approx(4.0)


def test_linreg_single_value_returns_it():
    assert linreg(FakeInterp([42.0]), "src", 5) == 42.0


def test_linreg_empty_history_is_na():
    assert linreg(FakeInterp([]), "src", 3) is NA