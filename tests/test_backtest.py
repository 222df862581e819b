import csv
from datetime import datetime, timezone

import pytest

from daytrade.backtest import (
    export_signals_to_csv,
    generate_intraday_data,
    main,
    run_backtest,
)
from daytrade.models import InsufficientDataError, Signal
from daytrade.vwap import VwapStrategy


@pytest.fixture(scope="module")
def data():
    return generate_intraday_data()


def test_generated_data_shape(data):
    assert len(data) == 5 * 390
    assert data[0].timestamp == datetime(2023, 6, 5, 9, 30, tzinfo=timezone.utc)
    assert data[-1].timestamp == datetime(2023, 6, 9, 15, 59, tzinfo=timezone.utc)


def test_generated_data_invariants(data):
    assert all(point.data.close >= 50.0 for point in data)
    assert all(point.data.low <= point.data.close <= point.data.high for point in data)
    assert all(point.data.open == point.data.close for point in data)
    timestamps = [point.timestamp for point in data]
    assert timestamps == sorted(timestamps)


def test_generated_data_is_deterministic(data):
    assert generate_intraday_data() == data


def test_opening_minute_volume(data):
    assert data[0].data.volume == 2000


def test_export_round_trip(tmp_path, data):
    sample = data[:25]
    signals = [Signal.BUY, Signal.SELL, Signal.HOLD, Signal.HOLD, Signal.BUY] * 5
    path = export_signals_to_csv(sample, signals, "VWAP Mean Reversion", tmp_path)
    assert path.name == "vwap_mean_reversion_signals.csv"

    with path.open(newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["timestamp", "open", "high", "low", "close", "volume", "signal"]
    assert len(rows) == len(sample) + 1
    for row, point, signal in zip(rows[1:], sample, signals):
        assert row[0] == point.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        assert float(row[1]) == point.data.open
        assert float(row[2]) == point.data.high
        assert float(row[3]) == point.data.low
        assert float(row[4]) == point.data.close
        assert int(row[5]) == point.data.volume
        assert row[6] == signal.value


def test_export_mismatch_raises(tmp_path, data):
    with pytest.raises(ValueError):
        export_signals_to_csv(data[:3], [Signal.HOLD], "x", tmp_path)


def test_run_backtest_reports_results(tmp_path, data):
    strategy = VwapStrategy.mean_reversion()
    result = run_backtest(strategy, data, "VWAP Mean Reversion", tmp_path)
    signals = strategy.generate_signals(data)
    assert result.performance == pytest.approx(
        strategy.calculate_performance(data, signals)
    )
    assert sum(result.signal_counts.values()) == len(data)
    assert result.signal_counts[Signal.BUY] == signals.count(Signal.BUY)
    assert result.csv_path == tmp_path / "vwap_mean_reversion_signals.csv"
    assert result.csv_path.exists()


def test_run_backtest_warns_when_export_fails(tmp_path, data, capsys):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    result = run_backtest(VwapStrategy.trend_following(), data, "Trend", blocker)
    assert result.csv_path is None
    assert "Warning: Failed to export signals to CSV" in capsys.readouterr().out


def test_run_backtest_propagates_strategy_errors(tmp_path, data):
    with pytest.raises(InsufficientDataError):
        run_backtest(VwapStrategy.mean_reversion(), data[:5], "Short", tmp_path)


def test_main_writes_all_files(tmp_path, capsys):
    assert main(["--output-dir", str(tmp_path)]) == 0
    names = sorted(path.name for path in tmp_path.iterdir())
    assert names == [
        "bollinger_bands_mean_reversion_signals.csv",
        "bollinger_bands_volatility_breakout_signals.csv",
        "vwap_mean_reversion_signals.csv",
        "vwap_trend_following_signals.csv",
    ]
    out = capsys.readouterr().out
    assert "Generated 1950 minutes of test data across 5 days" in out
    assert "Backtests complete" in out