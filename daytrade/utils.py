"""Shared helpers: back-testing, parameter validation and synthetic data."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Sequence

from daytrade.models import (
    DailyOhlcv,
    InsufficientDataError,
    InvalidDataError,
    OhlcvData,
    Signal,
)


def calculate_basic_performance(
    data: Sequence[DailyOhlcv],
    signals: Sequence[Signal],
    initial_cash: float = 10000.0,
) -> float:
    """Percentage return from acting on each signal at the next day's open."""
    if len(data) != len(signals):
        raise InvalidDataError("Data and signals arrays must be the same length")
    if len(data) <= 1:
        raise InsufficientDataError(
            "Need at least 2 data points to calculate performance"
        )

    cash = initial_cash
    shares = 0.0
    for signal, point in zip(signals, data[1:]):
        if signal is Signal.BUY:
            shares = cash / point.data.open
            cash = 0.0
        elif signal is Signal.SELL:
            cash += shares * point.data.open
            shares = 0.0

    final_value = cash + shares * data[-1].data.close
    return (final_value / initial_cash - 1.0) * 100.0


def _candle(
    rng: random.Random, day: date, open_price: float, close: float, volatility: float
) -> DailyOhlcv:
    high = max(open_price, close) + rng.random() * volatility * open_price * 0.5
    low = min(open_price, close) - rng.random() * volatility * open_price * 0.5
    volume = rng.randrange(1000, 10000)
    return DailyOhlcv(
        date=day,
        data=OhlcvData(open=open_price, high=high, low=low, close=close, volume=volume),
    )


def generate_test_data(
    num_points: int,
    starting_price: float,
    volatility: float,
    rng: random.Random | None = None,
) -> list[DailyOhlcv]:
    """Random-walk daily data on consecutive days starting 2023-01-01."""
    rng = rng or random.Random()
    base_date = date(2023, 1, 1)
    data = []
    current_price = starting_price
    for offset in range(num_points):
        price_change = current_price * volatility * (rng.random() - 0.5)
        open_price = current_price
        close = open_price + price_change
        data.append(
            _candle(rng, base_date + timedelta(days=offset), open_price, close, volatility)
        )
        current_price = close
    return data


def _format_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def validate_period(period: int, min_value: int) -> None:
    """Raise ValueError if ``period`` is below ``min_value``."""
    if period < min_value:
        raise ValueError(f"Period must be at least {min_value}")


def validate_positive(value: float, name: str) -> None:
    """Raise ValueError unless ``value`` is strictly positive."""
    if value <= 0.0:
        raise ValueError(f"{name} must be positive")


def validate_range(value: float, minimum: float, maximum: float, name: str) -> None:
    """Raise ValueError unless ``minimum <= value <= maximum``."""
    if value < minimum or value > maximum:
        raise ValueError(
            f"{name} must be between {_format_number(minimum)} "
            f"and {_format_number(maximum)}"
        )


def generate_daily_data(
    days: int,
    starting_price: float,
    volatility: float,
    trend: float,
    rng: random.Random | None = None,
) -> list[DailyOhlcv]:
    """Random daily data with a drift of ``trend`` per day.

    Dates cycle through January 2023, days 1 to 28.
    """
    rng = rng or random.Random()
    data = []
    current_price = starting_price
    for index in range(days):
        price_change = current_price * volatility * (rng.random() - 0.5)
        current_price = current_price * (1.0 + trend) + price_change
        if index == 0:
            open_price = starting_price
        else:
            open_price = current_price * (1.0 + (rng.random() - 0.5) * 0.01)
        day = date(2023, 1, index % 28 + 1)
        data.append(_candle(rng, day, open_price, current_price, volatility))
    return data