"""Lightweight streaming technical indicators and a trend forecaster."""

from __future__ import annotations

from collections import deque
from itertools import islice
from typing import Iterable, Sequence

from daytrade.models import InsufficientDataError


class IndicatorError(Exception):
    """An indicator has not seen enough data to produce a value."""


def _sum_last(values: Iterable[float], count: int) -> float:
    """Sum the last ``count`` values, newest first."""
    return sum(islice(reversed(list(values)), count))


def _ema(values: Sequence[float], period: int) -> float:
    """EMA over the last ``period`` values, seeded with their simple mean."""
    if len(values) < period:
        raise IndicatorError("Not enough data for EMA calculation")
    multiplier = 2.0 / (period + 1.0)
    window = list(values)[len(values) - period:]
    ema = sum(window) / period
    for value in window:
        ema = (value - ema) * multiplier + ema
    return ema


class SimpleMovingAverage:
    """Simple moving average over a fixed period."""

    def __init__(self, period: int) -> None:
        self.period = period
        self._prices: deque[float] = deque(maxlen=period * 2)

    def update(self, price: float) -> None:
        """Add a new price."""
        self._prices.append(price)

    def value(self) -> float:
        """Return the current average."""
        if len(self._prices) < self.period:
            raise IndicatorError("Not enough data points for SMA calculation")
        return _sum_last(self._prices, self.period) / self.period


class RelativeStrengthIndex:
    """Relative strength index using simple averages of gains and losses."""

    def __init__(self, period: int) -> None:
        self.period = period
        self._prices: deque[float] = deque(maxlen=period * 2)
        self._gains: deque[float] = deque(maxlen=period * 2)
        self._losses: deque[float] = deque(maxlen=period * 2)

    def update(self, price: float) -> None:
        """Add a new price."""
        if self._prices:
            change = price - self._prices[-1]
            if change > 0.0:
                self._gains.append(change)
                self._losses.append(0.0)
            else:
                self._gains.append(0.0)
                self._losses.append(abs(change))
        self._prices.append(price)

    def value(self) -> float:
        """Return the current RSI in the range 0 to 100."""
        if len(self._prices) <= self.period or len(self._gains) < self.period:
            raise IndicatorError("Not enough data points for RSI calculation")
        avg_gain = _sum_last(self._gains, self.period) / self.period
        avg_loss = _sum_last(self._losses, self.period) / self.period
        if avg_loss == 0.0:
            return 100.0
        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))


class Macd:
    """Moving average convergence divergence with a signal line."""

    def __init__(self, fast_period: int, slow_period: int, signal_period: int) -> None:
        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period
        self._prices: list[float] = []
        self._macd_values: list[float] = []

    def update(self, price: float) -> None:
        """Add a new price, producing a MACD value once enough are seen."""
        self._prices.append(price)
        if len(self._prices) > self.slow_period:
            fast = _ema(self._prices, self.fast_period)
            slow = _ema(self._prices, self.slow_period)
            self._macd_values.append(fast - slow)
        if len(self._prices) > self.slow_period * 2:
            del self._prices[0]
        if len(self._macd_values) > self.signal_period * 2:
            del self._macd_values[0]

    def macd_value(self) -> float:
        """Return the latest MACD line value."""
        if not self._macd_values:
            raise IndicatorError("Not enough data for MACD calculation")
        return self._macd_values[-1]

    def signal_value(self) -> float:
        """Return the current signal line value."""
        if len(self._macd_values) < self.signal_period:
            raise IndicatorError("Not enough data for signal line calculation")
        return _ema(self._macd_values, self.signal_period)


class TimeSeriesPredictor:
    """Trend-following forecaster for short price series."""

    def __init__(self, horizon: int, embedding_dim: int, use_ma: bool) -> None:
        self.horizon = horizon
        self.embedding_dim = embedding_dim
        self.use_ma = use_ma

    def forecast(self, prices: Sequence[float]) -> list[float]:
        """Project the recent trend ``horizon`` steps past the last price."""
        needed = self.embedding_dim + self.horizon
        if len(prices) < needed:
            raise InsufficientDataError(
                f"Need at least {needed} data points for forecasting"
            )
        trend = self._trend(prices)
        last_price = prices[-1]
        return [last_price + trend * step for step in range(1, self.horizon + 1)]

    def _trend(self, prices: Sequence[float]) -> float:
        if len(prices) < 2:
            return 0.0
        window = min(self.embedding_dim, len(prices) // 2)
        recent = list(prices)[len(prices) - window:]
        return (recent[-1] - recent[0]) / window