"""Strategy trading RSI crossings of overbought and oversold thresholds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from daytrade.indicators import IndicatorError, RelativeStrengthIndex
from daytrade.models import (
    CalculationError,
    DailyOhlcv,
    InsufficientDataError,
    InvalidDataError,
    Signal,
    TradingStrategy,
)

_INITIAL_VALUE = 1000.0


@dataclass(frozen=True)
class RsiStrategy(TradingStrategy):
    """Buy when RSI falls below the oversold level, sell when it rises above overbought."""

    period: int = 14
    overbought_threshold: float = 70.0
    oversold_threshold: float = 30.0

    def generate_signals(self, data: Sequence[DailyOhlcv]) -> list[Signal]:
        if len(data) <= self.period + 1:
            raise InsufficientDataError(
                f"Need at least {self.period + 2} data points for RSI calculation"
            )

        signals = [Signal.HOLD] * len(data)
        rsi = RelativeStrengthIndex(self.period)
        prev_value: float | None = None

        for index, point in enumerate(data):
            rsi.update(point.data.close)

            if index < self.period:
                continue

            try:
                value = rsi.value()
            except IndicatorError as exc:
                raise CalculationError(f"Failed to get RSI value: {exc}") from exc

            if prev_value is not None:
                if value < self.oversold_threshold <= prev_value:
                    signals[index] = Signal.BUY
                elif value > self.overbought_threshold >= prev_value:
                    signals[index] = Signal.SELL

            prev_value = value

        return signals

    def calculate_performance(
        self, data: Sequence[DailyOhlcv], signals: Sequence[Signal]
    ) -> float:
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