"""VWAP (volume-weighted average price) intraday strategies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from daytrade.indicators import IndicatorError
from daytrade.models import (
    CalculationError,
    InsufficientDataError,
    IntradayTradingStrategy,
    InvalidDataError,
    MinuteOhlcv,
    Signal,
)

_INITIAL_VALUE = 1000.0
_MARKET_OPEN = (9, 30)
_TREND_FRACTION = 0.7


@dataclass(frozen=True)
class VwapCalculator:
    """Computes VWAP over a rolling window or since the session open."""

    period: int
    reset_on_new_session: bool

    def calculate(self, data: Sequence[MinuteOhlcv], current_idx: int) -> float:
        """Return the VWAP of the window ending at ``current_idx``."""
        if not data or not 0 <= current_idx < len(data):
            raise IndicatorError("Invalid data or index for VWAP calculation")

        start = self._start_index(data, current_idx, data[current_idx].timestamp)
        if start > current_idx:
            raise IndicatorError("Invalid start index for VWAP calculation")

        window = data[start : current_idx + 1]
        volume_sum = sum(point.data.volume for point in window)
        weighted_sum = sum(
            (point.data.high + point.data.low + point.data.close) / 3.0
            * point.data.volume
            for point in window
        )
        if volume_sum == 0:
            raise IndicatorError("Zero volume in VWAP calculation period")
        return weighted_sum / volume_sum

    def _start_index(
        self, data: Sequence[MinuteOhlcv], current_idx: int, current_time: datetime
    ) -> int:
        if not self.reset_on_new_session:
            return max(0, current_idx - (self.period - 1))

        current_day = current_time.date()
        for index in range(current_idx, -1, -1):
            moment = data[index].timestamp
            if (moment.hour, moment.minute) == _MARKET_OPEN:
                return index
            if moment.date() < current_day:
                return index + 1
        return 0


@dataclass(frozen=True)
class VwapStrategy(IntradayTradingStrategy):
    """Trades deviations of the close from VWAP, reverting or following the trend."""

    period: int = 390
    reset_on_new_session: bool = True
    deviation_threshold: float = 1.0
    mean_reversion_mode: bool = True
    lookback_period: int = 20

    @classmethod
    def mean_reversion(cls) -> VwapStrategy:
        """Session VWAP, 1.5% deviation, 15-minute lookback, mean reversion."""
        return cls(
            period=390,
            reset_on_new_session=True,
            deviation_threshold=1.5,
            mean_reversion_mode=True,
            lookback_period=15,
        )

    @classmethod
    def trend_following(cls) -> VwapStrategy:
        """Rolling 60-minute VWAP, 0.5% deviation, 30-minute lookback, trend following."""
        return cls(
            period=60,
            reset_on_new_session=False,
            deviation_threshold=0.5,
            mean_reversion_mode=False,
            lookback_period=30,
        )

    @property
    def vwap_calculator(self) -> VwapCalculator:
        return VwapCalculator(self.period, self.reset_on_new_session)

    def _trend_share(
        self,
        data: Sequence[MinuteOhlcv],
        vwap_values: Sequence[float],
        index: int,
        above: bool,
    ) -> bool:
        if self.lookback_period == 0 or index < self.lookback_period:
            return False
        start = index - self.lookback_period
        pairs = zip(data[start:index], vwap_values[start:index])
        if above:
            count = sum(1 for point, vwap in pairs if point.data.close > vwap)
        else:
            count = sum(1 for point, vwap in pairs if point.data.close < vwap)
        return count / self.lookback_period > _TREND_FRACTION

    def generate_signals(self, data: Sequence[MinuteOhlcv]) -> list[Signal]:
        if len(data) < self.lookback_period:
            raise InsufficientDataError(
                f"Need at least {self.lookback_period} data points for VWAP strategy"
            )

        calculator = self.vwap_calculator
        vwap_values = []
        for index in range(len(data)):
            try:
                vwap_values.append(calculator.calculate(data, index))
            except IndicatorError as exc:
                raise CalculationError(f"VWAP calculation error: {exc}") from exc

        signals = [Signal.HOLD] * len(data)
        for index in range(self.lookback_period, len(data)):
            vwap = vwap_values[index]
            deviation_pct = (data[index].data.close - vwap) / vwap * 100.0

            if self.mean_reversion_mode:
                if deviation_pct < -self.deviation_threshold:
                    signals[index] = Signal.BUY
                elif deviation_pct > self.deviation_threshold:
                    signals[index] = Signal.SELL
            elif deviation_pct > self.deviation_threshold and self._trend_share(
                data, vwap_values, index, above=True
            ):
                signals[index] = Signal.BUY
            elif deviation_pct < -self.deviation_threshold and self._trend_share(
                data, vwap_values, index, above=False
            ):
                signals[index] = Signal.SELL

        return signals

    def calculate_performance(
        self, data: Sequence[MinuteOhlcv], signals: Sequence[Signal]
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