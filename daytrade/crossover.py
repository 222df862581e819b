"""Trend-following strategies built on moving-average and MACD crossovers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from daytrade.indicators import IndicatorError, Macd, SimpleMovingAverage
from daytrade.models import (
    CalculationError,
    DailyOhlcv,
    InsufficientDataError,
    InvalidDataError,
    Signal,
    TradingStrategy,
)

_INITIAL_VALUE = 1000.0


def _close_performance(data: Sequence[DailyOhlcv], signals: Sequence[Signal]) -> float:
    """Percentage return from trading the whole balance at each signal's close."""
    if len(data) != len(signals):
        raise InvalidDataError("Data and signals count mismatch")

    cash = _INITIAL_VALUE
    shares = 0.0
    for point, signal in zip(data, signals):
        close = point.data.close
        if signal is Signal.BUY and cash > 0.0:
            shares = cash / close
            cash = 0.0
        elif signal is Signal.SELL and shares > 0.0:
            cash = shares * close
            shares = 0.0

    last_close = data[-1].data.close if data else 0.0
    final_value = cash + shares * last_close
    return (final_value - _INITIAL_VALUE) / _INITIAL_VALUE * 100.0


@dataclass(frozen=True)
class MACrossover(TradingStrategy):
    """Buy when the short SMA crosses above the long SMA, sell on the reverse."""

    short_period: int
    long_period: int

    def generate_signals(self, data: Sequence[DailyOhlcv]) -> list[Signal]:
        if len(data) < self.long_period:
            raise InsufficientDataError(
                f"Need at least {self.long_period} data points"
            )

        signals = [Signal.HOLD] * len(data)
        short_sma = SimpleMovingAverage(self.short_period)
        long_sma = SimpleMovingAverage(self.long_period)
        previous: tuple[float, float] | None = None

        for index, point in enumerate(data):
            price = point.data.close
            short_sma.update(price)
            long_sma.update(price)

            if index < self.long_period - 1:
                continue

            try:
                short_value = short_sma.value()
            except IndicatorError as exc:
                raise CalculationError(f"Failed to get short SMA value: {exc}") from exc
            try:
                long_value = long_sma.value()
            except IndicatorError as exc:
                raise CalculationError(f"Failed to get long SMA value: {exc}") from exc

            if previous is not None:
                prev_short, prev_long = previous
                if short_value > long_value and prev_short <= prev_long:
                    signals[index] = Signal.BUY
                elif short_value < long_value and prev_short >= prev_long:
                    signals[index] = Signal.SELL

            previous = (short_value, long_value)

        return signals

    def calculate_performance(
        self, data: Sequence[DailyOhlcv], signals: Sequence[Signal]
    ) -> float:
        return _close_performance(data, signals)


@dataclass(frozen=True)
class MacdStrategy(TradingStrategy):
    """Buy when the MACD histogram turns positive, sell when it turns negative."""

    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9

    def generate_signals(self, data: Sequence[DailyOhlcv]) -> list[Signal]:
        required = self.slow_period + self.signal_period
        if len(data) < required:
            raise InsufficientDataError(
                f"Need at least {required} data points for MACD calculation"
            )

        signals = [Signal.HOLD] * len(data)
        macd = Macd(self.fast_period, self.slow_period, self.signal_period)
        prev_histogram: float | None = None

        for index, point in enumerate(data):
            macd.update(point.data.close)

            if index < required - 1:
                continue

            try:
                macd_line = macd.macd_value()
            except IndicatorError as exc:
                raise CalculationError(f"Failed to get MACD line: {exc}") from exc
            try:
                signal_line = macd.signal_value()
            except IndicatorError as exc:
                raise CalculationError(f"Failed to get signal line: {exc}") from exc

            histogram = macd_line - signal_line
            if prev_histogram is not None:
                if histogram > 0.0 and prev_histogram <= 0.0:
                    signals[index] = Signal.BUY
                elif histogram < 0.0 and prev_histogram >= 0.0:
                    signals[index] = Signal.SELL

            prev_histogram = histogram

        return signals

    def calculate_performance(
        self, data: Sequence[DailyOhlcv], signals: Sequence[Signal]
    ) -> float:
        return _close_performance(data, signals)