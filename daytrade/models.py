"""Market data records, trading signals and the strategy interfaces."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence


class TradeError(Exception):
    """Base class for errors raised by trading operations."""

    prefix = "Trade error"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class InvalidDataError(TradeError):
    """The input data is malformed or inconsistent."""

    prefix = "Invalid data"


class InsufficientDataError(TradeError):
    """There are too few data points for the requested calculation."""

    prefix = "Insufficient data for strategy"


class CalculationError(TradeError):
    """An indicator or strategy calculation failed."""

    prefix = "Strategy calculation error"


@dataclass(frozen=True)
class OhlcvData:
    """Open, high, low, close and volume for one period."""

    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class DailyOhlcv:
    """OHLCV data for one trading day."""

    date: date
    data: OhlcvData


@dataclass(frozen=True)
class MinuteOhlcv:
    """OHLCV data for one minute."""

    timestamp: datetime
    data: OhlcvData


class Signal(enum.Enum):
    """A trading decision."""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class TradingStrategy(abc.ABC):
    """A strategy working on daily data."""

    @abc.abstractmethod
    def generate_signals(self, data: Sequence[DailyOhlcv]) -> list[Signal]:
        """Return one signal per data point."""

    @abc.abstractmethod
    def calculate_performance(
        self, data: Sequence[DailyOhlcv], signals: Sequence[Signal]
    ) -> float:
        """Return the percentage return obtained by following the signals."""


class IntradayTradingStrategy(abc.ABC):
    """A strategy working on minute data."""

    @abc.abstractmethod
    def generate_signals(self, data: Sequence[MinuteOhlcv]) -> list[Signal]:
        """Return one signal per data point."""

    @abc.abstractmethod
    def calculate_performance(
        self, data: Sequence[MinuteOhlcv], signals: Sequence[Signal]
    ) -> float:
        """Return the percentage return obtained by following the signals."""