"""Back-test of intraday strategies on synthetic minute data."""

from __future__ import annotations

import argparse
import csv
import math
import sys
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from daytrade.bollinger import BollingerBandsStrategy
from daytrade.models import IntradayTradingStrategy, MinuteOhlcv, OhlcvData, Signal, TradeError
from daytrade.vwap import VwapStrategy

MINUTES_PER_DAY = 390
_CSV_HEADER = ["timestamp", "open", "high", "low", "close", "volume", "signal"]


@dataclass(frozen=True)
class BacktestResult:
    """Outcome of one strategy back-test."""

    name: str
    performance: float
    signal_counts: dict[Signal, int]
    csv_path: Path | None


def _session_pattern(minute: int, hour: int, minute_of_hour: int) -> tuple[float, float]:
    """Return the price change and volume multiplier for a time of day."""
    if hour == 9 or (hour == 10 and minute_of_hour < 30):
        return math.sin((minute % 15) / 15.0) * 0.3, 1.5
    if (hour == 11 and minute_of_hour >= 30) or hour == 12 or (
        hour == 13 and minute_of_hour <= 30
    ):
        return math.sin((minute % 20) / 20.0) * 0.1, 0.7
    if hour >= 15:
        return math.sin((minute % 10) / 10.0) * 0.25, 1.3
    return math.sin((minute % 30) / 30.0) * 0.2, 1.0


def generate_intraday_data() -> list[MinuteOhlcv]:
    """Five trading days of deterministic minute data, 9:30 to 16:00 UTC."""
    data = []
    for day in range(5):
        base = datetime(2023, 6, 5 + day, 9, 30, tzinfo=timezone.utc)
        price = 100.0 + day * 2.0 + (day % 3)
        for minute in range(MINUTES_PER_DAY):
            timestamp = base + timedelta(minutes=minute)
            change, volume_multiplier = _session_pattern(
                minute, timestamp.hour, timestamp.minute
            )
            if day % 3 == 0:
                change += 0.01
            elif day % 3 == 1:
                change -= 0.01

            price *= 1.0 + change
            price += (minute % 5) * 0.05 - 0.125
            price = max(price, 50.0)

            high = price * (1.0 + 0.001 * (minute % 3))
            low = price * (1.0 - 0.001 * (minute % 4))
            volume = (
                int(1000 * volume_multiplier)
                + (minute % 5) * 50
                + (500 if minute % 15 == 0 else 0)
            )
            data.append(
                MinuteOhlcv(
                    timestamp=timestamp,
                    data=OhlcvData(
                        open=price, high=high, low=low, close=price, volume=volume
                    ),
                )
            )
    return data


def _format_float(value: float) -> str:
    """Shortest round-trip decimal form, without exponent or a trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def export_signals_to_csv(
    data: Sequence[MinuteOhlcv],
    signals: Sequence[Signal],
    strategy_name: str,
    output_dir: Path | str = ".",
) -> Path:
    """Write data and signals to ``<name>_signals.csv`` and return its path."""
    if len(data) != len(signals):
        raise ValueError("Data and signals must be the same length")
    filename = f"{strategy_name.lower().replace(' ', '_')}_signals.csv"
    path = Path(output_dir) / filename
    with path.open("w", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(_CSV_HEADER)
        for point, signal in zip(data, signals):
            ohlcv = point.data
            writer.writerow(
                [
                    point.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    _format_float(ohlcv.open),
                    _format_float(ohlcv.high),
                    _format_float(ohlcv.low),
                    _format_float(ohlcv.close),
                    ohlcv.volume,
                    signal.value,
                ]
            )
    print(f"  Exported signals to {path}")
    return path


def run_backtest(
    strategy: IntradayTradingStrategy,
    data: Sequence[MinuteOhlcv],
    name: str,
    output_dir: Path | str = ".",
) -> BacktestResult:
    """Run ``strategy`` on ``data``, report the results and export them as CSV."""
    signals = strategy.generate_signals(data)
    performance = strategy.calculate_performance(data, signals)

    print(f"Strategy: {name}")
    print(f"  Performance: {performance:.2f}%")

    tally = Counter(signals)
    counts = {signal: tally.get(signal, 0) for signal in Signal}
    print("  Signal counts:")
    print(f"    Buy:  {counts[Signal.BUY]}")
    print(f"    Sell: {counts[Signal.SELL]}")
    print(f"    Hold: {counts[Signal.HOLD]}")

    csv_path: Path | None
    try:
        csv_path = export_signals_to_csv(data, signals, name, output_dir)
    except OSError as exc:
        print(f"Warning: Failed to export signals to CSV: {exc}")
        csv_path = None

    return BacktestResult(
        name=name, performance=performance, signal_counts=counts, csv_path=csv_path
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Back-test the VWAP and Bollinger Bands strategies on synthetic data."""
    parser = argparse.ArgumentParser(description="Intraday trading strategy backtest")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="directory for the exported signal CSV files",
    )
    args = parser.parse_args(argv)

    print("Intraday Trading Strategy Backtest")
    print("==================================")

    data = generate_intraday_data()
    print(
        f"Generated {len(data)} minutes of test data across "
        f"{len(data) // MINUTES_PER_DAY} days"
    )

    runs = [
        (VwapStrategy.mean_reversion(), "VWAP Mean Reversion"),
        (VwapStrategy.trend_following(), "VWAP Trend Following"),
        (BollingerBandsStrategy.mean_reversion(), "Bollinger Bands Mean Reversion"),
        (
            BollingerBandsStrategy.volatility_breakout(),
            "Bollinger Bands Volatility Breakout",
        ),
    ]
    try:
        for strategy, name in runs:
            run_backtest(strategy, data, name, args.output_dir)
    except TradeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("\nBacktests complete. Results saved to CSV files for visualization.")
    print(
        "You can import these files into a charting tool or spreadsheet for analysis."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())