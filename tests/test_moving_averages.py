import pytest

from pinelet.ta.moving_averages import ema, hma, rma, sma, swma, vwma, wma
from pinelet.values import NA, PineTypeError, Series, UndefinedVariableError


class History:
    def __init__(self, **series):
        self.series = series

    def get_historical(self, series_id, offset):
        past = self.series.get(series_id, [])
        if 1 <= offset <= len(past):
            return past[offset - 1]
        return None


class Context:
    def __init__(self, history=None, variables=None):
        self.historical_provider = history
        self.variables = dict(variables or {})

    def get_variable(self, name):
        return self.variables.get(name)

    def get_series_values(self, source, length):
        if isinstance(source, Series):
            if not isinstance(source.current, float):
                raise PineTypeError("Series must contain numbers")
            values = [source.current]
            if self.historical_provider is not None:
                for offset in range(1, length):
                    value = self.historical_provider.get_historical(source.id, offset)
                    if not isinstance(value, float):
                        break
                    values.append(value)
            return values
        if isinstance(source, float):
            return [source]
        raise PineTypeError("source must be a number or series")


def make(current, past, volume=None, volume_past=None):
    series = {"close": past}
    variables = {}
    if volume is not None:
        series["volume"] = volume_past or []
        variables["volume"] = Series("volume", volume)
    return Context(History(**series), variables), Series("close", current)


@pytest.mark.parametrize("function", [sma, ema, rma, wma, vwma, hma])
def test_zero_length_raises(function):
    ctx, source = make(1.0, [1.0])
    with pytest.raises(PineTypeError):
        function(ctx, source, 0.0)


@pytest.mark.parametrize("function", [sma, ema, rma, wma, hma])
def test_constant_series_averages_to_constant(function):
    ctx, source = make(5.0, [5.0] * 10)
    assert function(ctx, source, 4.0) == pytest.approx(5.0)


def test_swma_constant_series():
    ctx, source = make(5.0, [5.0] * 10)
    assert swma(ctx, source) == pytest.approx(5.0)


def test_sma_averages_available_history():
    ctx, source = make(4.0, [2.0])
    assert sma(ctx, source, 10.0) == pytest.approx(3.0)


@pytest.mark.parametrize("function", [sma, ema, rma, wma])
def test_number_source_returns_number(function):
    assert function(Context(), 7.5, 3.0) == 7.5


@pytest.mark.parametrize("function", [ema, rma, wma])
def test_string_source_raises(function):
    with pytest.raises(PineTypeError):
        function(Context(), "text", 3.0)


@pytest.mark.parametrize("function", [ema, rma, wma])
def test_series_with_non_number_raises(function):
    with pytest.raises(PineTypeError):
        function(Context(), Series("close", "text"), 3.0)


def test_ema_without_history_is_current():
    assert ema(Context(), Series("close", 12.0), 5.0) == pytest.approx(12.0)


@pytest.mark.parametrize("function", [ema, rma])
def test_smoothing_stays_within_range(function):
    ctx, source = make(10.0, [9.0, 8.0, 7.0, 6.0, 5.0, 4.0])
    result = function(ctx, source, 3.0)
    assert 4.0 <= result <= 10.0


def test_wma_weights_recent_values_more():
    ctx, source = make(10.0, [8.0, 6.0, 4.0])
    assert wma(ctx, source, 4.0) > sma(ctx, source, 4.0)


def test_wma_two_values():
    ctx, source = make(3.0, [1.0])
    assert wma(ctx, source, 2.0) == pytest.approx(7.0 / 3.0)


def test_vwma_equal_volumes_matches_sma():
    ctx, source = make(10.0, [8.0, 6.0], volume=2.0, volume_past=[2.0, 2.0])
    assert vwma(ctx, source, 3.0) == pytest.approx(sma(ctx, source, 3.0))


def test_vwma_zero_volume_is_na():
    ctx, source = make(10.0, [8.0], volume=0.0, volume_past=[0.0])
    assert vwma(ctx, source, 2.0) is NA


def test_vwma_mismatched_history_is_na():
    ctx, source = make(10.0, [8.0, 6.0], volume=1.0, volume_past=[1.0])
    assert vwma(ctx, source, 3.0) is NA


def test_vwma_without_volume_raises():
    ctx, source = make(10.0, [8.0])
    with pytest.raises(UndefinedVariableError):
        vwma(ctx, source, 2.0)


def test_hma_too_little_history_is_na():
    ctx, source = make(10.0, [9.0])
    assert hma(ctx, source, 9.0) is NA


def test_swma_needs_four_values():
    ctx, source = make(4.0, [3.0, 2.0])
    assert swma(ctx, source) is NA


def test_swma_weights():
    ctx, source = make(4.0, [3.0, 2.0, 1.0])
    assert swma(ctx, source) == pytest.approx(2.5)