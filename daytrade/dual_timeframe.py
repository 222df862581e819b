"""Confirmation of daily signals with a short-term minute-data forecast."""

from __future__ import annotations

from typing import Sequence

from daytrade.indicators import TimeSeriesPredictor
from daytrade.models import MinuteOhlcv, Signal, TradeError, TradingStrategy


class DualTimeframeStrategy:
    """Combines a daily strategy with a minute-level trend forecast."""

    def __init__(self, daily_strategy: TradingStrategy, confirmation_period: int) -> None:
        self.daily_strategy = daily_strategy
        self.confirmation_period = confirmation_period
        self.predictor = TimeSeriesPredictor(
            horizon=confirmation_period, embedding_dim=5, use_ma=True
        )

    def confirm_signal(
        self, daily_signal: Signal, minute_data: Sequence[MinuteOhlcv]
    ) -> Signal:
        """Confirm, neutralise or pass through ``daily_signal`` using minute data."""
        if len(minute_data) < self.confirmation_period:
            return Signal.HOLD

        closes = [point.data.close for point in minute_data]
        try:
            forecast = self.predictor.forecast(closes)
        except TradeError:
            return daily_signal

        if not closes or not forecast:
            return daily_signal

        last_price = closes[-1]
        change_pct = (forecast[-1] - last_price) / last_price * 100.0

        if daily_signal is Signal.BUY and change_pct > 0.5:
            return Signal.BUY
        if daily_signal is Signal.SELL and change_pct < -0.5:
            return Signal.SELL
        if (daily_signal is Signal.BUY and change_pct < -0.2) or (
            daily_signal is Signal.SELL and change_pct > 0.2
        ):
            return Signal.HOLD
        return daily_signal