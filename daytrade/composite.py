"""Composite strategy weighing RSI, MACD and moving-average signals."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from daytrade.indicators import (
    IndicatorError,
    Macd,
    RelativeStrengthIndex,
    SimpleMovingAverage,
)
from daytrade.models import (
    CalculationError,
    DailyOhlcv,
    InsufficientDataError,
    Signal,
    TradingStrategy,
)

_INITIAL_CASH = 10000.0
_DECISION_THRESHOLD = 0.5


class _Strength(enum.Enum):
    """Strength of an indicator's signal, valued as its weighting factor."""

    STRONG = 1.0
    MODERATE = 0.7
    WEAK = 0.3
    NEUTRAL = 0.0


class _WeightedSignal(NamedTuple):
    signal: Signal
    strength: _Strength


_NEUTRAL = _WeightedSignal(Signal.HOLD, _Strength.NEUTRAL)


def _crossover_strength(change: float) -> _Strength:
    if change > 0.2:
        return _Strength.STRONG
    if change > 0.1:
        return _Strength.MODERATE
    return _Strength.WEAK


@dataclass(frozen=True)
class CompositeStrategy(TradingStrategy):
    """Combines RSI, MACD and three moving averages into one weighted decision."""

    rsi_period: int = 14
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    short_ma_period: int = 20
    medium_ma_period: int = 50
    long_ma_period: int = 200
    rsi_weight: float = 0.33
    macd_weight: float = 0.33
    ma_weight: float = 0.34

    def _analyze_rsi(self, index: int, rsi: RelativeStrengthIndex) -> _WeightedSignal:
        if index < self.rsi_period:
            return _NEUTRAL
        try:
            value = rsi.value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get RSI value: {exc}") from exc

        if value < self.rsi_oversold:
            if value < self.rsi_oversold - 10.0:
                strength = _Strength.STRONG
            elif value < self.rsi_oversold - 5.0:
                strength = _Strength.MODERATE
            else:
                strength = _Strength.WEAK
            return _WeightedSignal(Signal.BUY, strength)
        if value > self.rsi_overbought:
            if value > self.rsi_overbought + 10.0:
                strength = _Strength.STRONG
            elif value > self.rsi_overbought + 5.0:
                strength = _Strength.MODERATE
            else:
                strength = _Strength.WEAK
            return _WeightedSignal(Signal.SELL, strength)
        return _NEUTRAL

    def _analyze_macd(
        self, index: int, macd: Macd, prev_histogram: float | None
    ) -> tuple[_WeightedSignal, float | None]:
        """Return the MACD signal and the histogram to remember for next time."""
        if index < self.macd_slow_period + self.macd_signal_period - 1:
            return _NEUTRAL, prev_histogram
        try:
            macd_line = macd.macd_value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get MACD line: {exc}") from exc
        try:
            signal_line = macd.signal_value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get signal line: {exc}") from exc

        histogram = macd_line - signal_line
        result = _NEUTRAL
        if prev_histogram is not None:
            strength = _crossover_strength(abs(histogram - prev_histogram))
            if histogram > 0.0 and prev_histogram <= 0.0:
                result = _WeightedSignal(Signal.BUY, strength)
            elif histogram < 0.0 and prev_histogram >= 0.0:
                result = _WeightedSignal(Signal.SELL, strength)
        return result, histogram

    def _analyze_moving_averages(
        self,
        price: float,
        index: int,
        short_ma: SimpleMovingAverage,
        medium_ma: SimpleMovingAverage,
        long_ma: SimpleMovingAverage,
    ) -> _WeightedSignal:
        if index < self.long_ma_period:
            return _NEUTRAL
        try:
            short_value = short_ma.value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get short MA: {exc}") from exc
        try:
            medium_value = medium_ma.value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get medium MA: {exc}") from exc
        try:
            long_value = long_ma.value()
        except IndicatorError as exc:
            raise CalculationError(f"Failed to get long MA: {exc}") from exc

        bullish = sum(
            (
                short_value > medium_value,
                medium_value > long_value,
                price > short_value,
            )
        )
        if bullish == 3:
            return _WeightedSignal(Signal.BUY, _Strength.STRONG)
        if bullish == 0:
            return _WeightedSignal(Signal.SELL, _Strength.STRONG)
        return _NEUTRAL

    def _combine(self, *weighted: tuple[float, _WeightedSignal]) -> Signal:
        buy_score = 0.0
        sell_score = 0.0
        for weight, (signal, strength) in weighted:
            if signal is Signal.BUY:
                buy_score += weight * strength.value
            elif signal is Signal.SELL:
                sell_score += weight * strength.value

        if buy_score > sell_score and buy_score > _DECISION_THRESHOLD:
            return Signal.BUY
        if sell_score > buy_score and sell_score > _DECISION_THRESHOLD:
            return Signal.SELL
        return Signal.HOLD

    def generate_signals(self, data: Sequence[DailyOhlcv]) -> list[Signal]:
        if not data:
            raise InsufficientDataError("No price data provided")

        rsi = RelativeStrengthIndex(self.rsi_period)
        macd = Macd(self.macd_fast_period, self.macd_slow_period, self.macd_signal_period)
        short_ma = SimpleMovingAverage(self.short_ma_period)
        medium_ma = SimpleMovingAverage(self.medium_ma_period)
        long_ma = SimpleMovingAverage(self.long_ma_period)
        prev_histogram: float | None = None

        signals = []
        for index, point in enumerate(data):
            price = point.data.close
            for indicator in (rsi, macd, short_ma, medium_ma, long_ma):
                indicator.update(price)

            rsi_signal = self._analyze_rsi(index, rsi)
            macd_signal, prev_histogram = self._analyze_macd(index, macd, prev_histogram)
            ma_signal = self._analyze_moving_averages(
                price, index, short_ma, medium_ma, long_ma
            )
            signals.append(
                self._combine(
                    (self.rsi_weight, rsi_signal),
                    (self.macd_weight, macd_signal),
                    (self.ma_weight, ma_signal),
                )
            )
        return signals

    def calculate_performance(
        self, data: Sequence[DailyOhlcv], signals: Sequence[Signal]
    ) -> float:
        """Return the percentage return of a long/short position traded at the next open."""
        if len(data) != len(signals):
            raise CalculationError("Data and signals length mismatch")
        if len(data) < 2:
            raise InsufficientDataError("Need at least 2 data points")

        position = 0.0
        cash = _INITIAL_CASH
        equity = cash
        for day, (signal, point) in enumerate(zip(signals, data[1:]), start=1):
            price = point.data.open
            if price <= 0.0:
                raise CalculationError(f"Invalid price data at day {day}")

            if signal is Signal.BUY and position <= 0.0:
                cash += position * price
                position = cash / price
                cash = 0.0
            elif signal is Signal.SELL and position >= 0.0:
                cash += position * price
                position = -cash / price
                cash *= 2.0

            equity = cash + position * point.data.close

        return (equity - _INITIAL_CASH) / _INITIAL_CASH * 100.0