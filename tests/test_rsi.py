from datetime import date, timedelta

import pytest

from daytrade.models import (
    DailyOhlcv,
    InsufficientDataError,
    InvalidDataError,
    OhlcvData,
    Signal,
)
from daytrade.rsi import RsiStrategy


def _candle(day_date, open_price, high, low, close, volume):
    return DailyOhlcv(
        date=day_date,
        data=OhlcvData(open=open_price, high=high, low=low, close=close, volume=volume),
    )


def _rsi_test_data():
    data = []
    price = 100.0
    changes = {0: 1.0, 1: -0.5, 2: 0.25}

    for day in range(1, 21):
        change = changes[day % 3]
        data.append(_candle(date(2023, 1, day), price, price * 1.01, price * 0.99,
                            price + change, 1000))
        price = data[-1].data.close

    for day in range(21, 31):
        price *= 1.03
        data.append(_candle(date(2023, 1, day), price / 1.03, price * 1.01, price * 0.98,
                            price, 2000))

    for day in range(1, 4):
        data.append(_candle(date(2023, 2, day), price, price * 1.01, price * 0.99,
                            price, 1500))

    for day in range(4, 16):
        price *= 0.97
        data.append(_candle(date(2023, 2, day), price / 0.97, price * 1.01, price * 0.98,
                            price, 3000))

    return data


def _from_closes(closes):
    start = date(2023, 1, 1)
    return [
        _candle(start + timedelta(days=offset), close, close, close, close, 1000)
        for offset, close in enumerate(closes)
    ]


def test_rsi_signal_generation():
    data = _rsi_test_data()
    signals = RsiStrategy(14, 70.0, 30.0).generate_signals(data)

    assert len(signals) == len(data)
    assert signals.count(Signal.BUY) > 0
    assert signals.count(Signal.SELL) > 0


def test_rsi_default_parameters():
    strategy = RsiStrategy()
    assert strategy.period == 14
    assert strategy.overbought_threshold == 70.0
    assert strategy.oversold_threshold == 30.0


def test_rsi_holds_during_warm_up():
    signals = RsiStrategy().generate_signals(_rsi_test_data())
    assert all(signal is Signal.HOLD for signal in signals[:15])


def test_rsi_monotonic_rise_never_crosses():
    signals = RsiStrategy(5, 70.0, 30.0).generate_signals(
        _from_closes([float(n) for n in range(1, 30)])
    )
    assert signals == [Signal.HOLD] * 29


def test_rsi_insufficient_data():
    with pytest.raises(InsufficientDataError) as info:
        RsiStrategy(14, 70.0, 30.0).generate_signals(_from_closes([1.0] * 15))
    assert "16" in str(info.value)


def test_rsi_minimum_length_accepted():
    signals = RsiStrategy(14, 70.0, 30.0).generate_signals(_from_closes([1.0] * 16))
    assert signals == [Signal.HOLD] * 16


def test_performance_buy_then_sell():
    data = _from_closes([50.0, 60.0, 75.0])
    signals = [Signal.BUY, Signal.HOLD, Signal.SELL]
    assert RsiStrategy().calculate_performance(data, signals) == pytest.approx(50.0)


def test_performance_all_hold_is_zero():
    data = _from_closes([50.0, 60.0, 75.0])
    assert RsiStrategy().calculate_performance(data, [Signal.HOLD] * 3) == 0.0


def test_performance_length_mismatch():
    with pytest.raises(InvalidDataError):
        RsiStrategy().calculate_performance(_from_closes([1.0, 2.0]), [Signal.BUY])