from collections import Counter
from datetime import date

import pytest

from daytrade.models import (
    CalculationError,
    DailyOhlcv,
    InsufficientDataError,
    IntradayTradingStrategy,
    InvalidDataError,
    OhlcvData,
    Signal,
    TradeError,
    TradingStrategy,
)


def create_test_data():
    return [
        DailyOhlcv(
            date=date(2023, 1, 1),
            data=OhlcvData(open=100.0, high=105.0, low=99.0, close=102.0, volume=1000),
        ),
        DailyOhlcv(
            date=date(2023, 1, 2),
            data=OhlcvData(open=102.0, high=106.0, low=101.0, close=105.0, volume=1200),
        ),
    ]


def test_ohlcv_data_creation():
    data = create_test_data()
    assert len(data) == 2
    assert data[0].data.close == 102.0


def test_records_are_immutable():
    data = create_test_data()
    with pytest.raises(AttributeError):
        data[0].data.close = 1.0
    assert data[0].data.close == 102.0
    assert data[0].date == date(2023, 1, 1)


@pytest.mark.parametrize(
    "error_type, message",
    [
        (InvalidDataError, "Invalid data: bad"),
        (InsufficientDataError, "Insufficient data for strategy: bad"),
        (CalculationError, "Strategy calculation error: bad"),
    ],
)
def test_error_messages(error_type, message):
    error = error_type("bad")
    assert str(error) == message
    assert error.detail == "bad"
    assert isinstance(error, TradeError)


def test_signals_are_hashable_and_countable():
    signals = [Signal(name) for name in ("buy", "sell", "buy", "hold")]
    counts = Counter(signals)
    assert counts[Signal.BUY] == 2
    assert counts[Signal.SELL] == 1
    assert counts[Signal.HOLD] == 1
    assert len({Signal("buy"), Signal.BUY}) == 1


def test_signal_values():
    assert Signal("buy") is Signal.BUY
    assert Signal.SELL.value == "sell"


def test_strategy_interfaces_are_abstract():
    with pytest.raises(TypeError):
        TradingStrategy()
    with pytest.raises(TypeError):
        IntradayTradingStrategy()


def test_concrete_strategy_can_be_used():
    class AlwaysBuy(TradingStrategy):
        def generate_signals(self, data):
            return [Signal.BUY for _ in data]

        def calculate_performance(self, data, signals):
            return float(len(signals))

    strategy = AlwaysBuy()
    data = create_test_data()
    signals = strategy.generate_signals(data)
    assert signals == [Signal.BUY, Signal.BUY]
    assert strategy.calculate_performance(data, signals) == 2.0