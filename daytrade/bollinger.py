"""Bollinger Bands indicator and an intraday strategy built on it."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
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


class BollingerBands:
    """Rolling Bollinger Bands over the last ``period`` prices."""

    def __init__(self, period: int, std_dev_multiplier: float) -> None:
        self.period = period
        self.std_dev_multiplier = std_dev_multiplier
        self._prices: deque[float] = deque(maxlen=period)

    def update(self, price: float) -> None:
        """Add a new price, dropping the oldest once the window is full."""
        self._prices.append(price)

    def middle_band(self) -> float:
        """Return the simple moving average of the window."""
        if len(self._prices) < self.period:
            raise IndicatorError(
                "Not enough data for Bollinger Bands calculation. "
                f"Need {self.period} data points."
            )
        return sum(self._prices) / len(self._prices)

    def _standard_deviation(self, mean: float) -> float:
        variance = sum((price - mean) ** 2 for price in self._prices) / len(self._prices)
        return math.sqrt(variance)

    def upper_band(self) -> float:
        """Return the middle band plus the scaled standard deviation."""
        middle = self.middle_band()
        return middle + self._standard_deviation(middle) * self.std_dev_multiplier

    def lower_band(self) -> float:
        """Return the middle band minus the scaled standard deviation."""
        middle = self.middle_band()
        return middle - self._standard_deviation(middle) * self.std_dev_multiplier

    def band_width(self) -> float:
        """Return the distance between the bands as a percentage of the middle."""
        upper = self.upper_band()
        lower = self.lower_band()
        middle = self.middle_band()
        return (upper - lower) / middle * 100.0

    def percent_b(self, price: float) -> float:
        """Return where ``price`` sits between the lower (0) and upper (1) band."""
        upper = self.upper_band()
        lower = self.lower_band()
        if upper - lower == 0.0:
            raise IndicatorError("Band width is zero, cannot calculate %B")
        return (price - lower) / (upper - lower)


@dataclass(frozen=True)
class BollingerBandsStrategy(IntradayTradingStrategy):
    """Mean-reversion and breakout signals from Bollinger Bands on minute data."""

    period: int = 20
    std_dev_multiplier: float = 2.0
    oversold_threshold: float = 0.1
    overbought_threshold: float = 0.9
    bandwidth_expansion_threshold: float = 5.0
    trend_confirmation_length: int = 5

    @classmethod
    def mean_reversion(cls) -> BollingerBandsStrategy:
        """Parameters tuned for trading reversals from extreme band levels."""
        return cls(
            period=20,
            std_dev_multiplier=2.5,
            oversold_threshold=0.05,
            overbought_threshold=0.95,
            bandwidth_expansion_threshold=7.0,
            trend_confirmation_length=3,
        )

    @classmethod
    def volatility_breakout(cls) -> BollingerBandsStrategy:
        """Parameters tuned for trading breakouts on expanding volatility."""
        return cls(
            period=20,
            std_dev_multiplier=2.0,
            oversold_threshold=0.2,
            overbought_threshold=0.8,
            bandwidth_expansion_threshold=4.0,
            trend_confirmation_length=3,
        )

    @property
    def _warmup(self) -> int:
        return self.period + self.trend_confirmation_length

    def _bandwidth_expanding(self, band_widths: Sequence[float], index: int) -> bool:
        lookback = self.trend_confirmation_length
        if index < lookback:
            return False
        factor = 1.0 + self.bandwidth_expansion_threshold / 100.0
        return band_widths[index] > band_widths[index - lookback] * factor

    def _is_upside_breakout(
        self, percent_b: float, band_widths: Sequence[float], index: int
    ) -> bool:
        return percent_b > 1.0 and self._bandwidth_expanding(band_widths, index)

    def _is_downside_breakout(
        self, percent_b: float, band_widths: Sequence[float], index: int
    ) -> bool:
        return percent_b < 0.0 and self._bandwidth_expanding(band_widths, index)

    def _recent(self, percent_bs: Sequence[float], index: int) -> list[float] | None:
        length = self.trend_confirmation_length
        if index < length:
            return None
        return list(percent_bs[index - length + 1 : index + 1])

    def _is_trending_up(self, percent_bs: Sequence[float], index: int) -> bool:
        recent = self._recent(percent_bs, index)
        if recent is None:
            return False
        count = sum(1 for value in recent if value > 0.5)
        return count >= self.trend_confirmation_length // 2 + 1

    def _is_trending_down(self, percent_bs: Sequence[float], index: int) -> bool:
        recent = self._recent(percent_bs, index)
        if recent is None:
            return False
        count = sum(1 for value in recent if value < 0.5)
        return count >= self.trend_confirmation_length // 2 + 1

    def generate_signals(self, data: Sequence[MinuteOhlcv]) -> list[Signal]:
        if len(data) < self._warmup:
            raise InsufficientDataError(
                f"Need at least {self._warmup} data points for Bollinger Bands strategy"
            )

        signals = [Signal.HOLD] * len(data)
        bands = BollingerBands(self.period, self.std_dev_multiplier)
        percent_bs = [0.5] * len(data)
        band_widths = [0.0] * len(data)

        for index, point in enumerate(data):
            price = point.data.close
            bands.update(price)
            if index < self.period - 1:
                continue
            try:
                percent_bs[index] = bands.percent_b(price)
            except IndicatorError as exc:
                raise CalculationError(f"Failed to calculate %B: {exc}") from exc
            try:
                band_widths[index] = bands.band_width()
            except IndicatorError as exc:
                raise CalculationError(
                    f"Failed to calculate band width: {exc}"
                ) from exc

        for index in range(self._warmup - 1, len(data)):
            percent_b = percent_bs[index]
            if percent_b <= self.oversold_threshold and self._is_trending_down(
                percent_bs, index
            ):
                signals[index] = Signal.BUY
            elif percent_b >= self.overbought_threshold and self._is_trending_up(
                percent_bs, index
            ):
                signals[index] = Signal.SELL
            elif self._is_upside_breakout(percent_b, band_widths, index):
                signals[index] = Signal.BUY
            elif self._is_downside_breakout(percent_b, band_widths, index):
                signals[index] = Signal.SELL

        return signals

    def calculate_performance(
        self, data: Sequence[MinuteOhlcv], signals: Sequence[Signal]
    ) -> float:
        if len(data) != len(signals):
            raise InvalidDataError("Data and signals count mismatch")

        cash = _INITIAL_VALUE
        shares = 0.0
        start = self._warmup - 1
        for point, signal in zip(data[start:], signals[start:]):
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