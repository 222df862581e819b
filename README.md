# daytrade

Trading strategies for daily and minute OHLCV (open, high, low, close, volume)
data. Each strategy turns a price series into a list of `Signal.BUY`,
`Signal.SELL` or `Signal.HOLD` values. It can then report the percentage return
of trading on those signals.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## What is included

- **Data model** (`daytrade.models`)
  - `OhlcvData`, `DailyOhlcv` and `MinuteOhlcv` records, and the `Signal` enum
    (values `"buy"`, `"sell"`, `"hold"`).
  - The abstract interfaces `TradingStrategy` (daily data) and
    `IntradayTradingStrategy` (minute data), each with `generate_signals` and
    `calculate_performance`.
  - The errors `TradeError`, `InvalidDataError`, `InsufficientDataError` and
    `CalculationError`.
- **Streaming indicators** (`daytrade.indicators`)
  - `SimpleMovingAverage`, `RelativeStrengthIndex` and `Macd`. Each has an
    `update(price)` method; asking for a value before enough prices have been
    seen raises `IndicatorError`.
  - `TimeSeriesPredictor`, a simple trend-following forecaster.
- **Daily strategies**
  - `MACrossover` and `MacdStrategy` in `daytrade.crossover`.
  - `RsiStrategy` in `daytrade.rsi`.
  - `CompositeStrategy` in `daytrade.composite`, a weighted blend of RSI, MACD
    and three moving averages, backtested with long and short positions.
- **Intraday strategies**
  - `BollingerBandsStrategy` in `daytrade.bollinger`, with the
    `mean_reversion()` and `volatility_breakout()` presets. The module also
    provides the `BollingerBands` indicator.
  - `VwapStrategy` in `daytrade.vwap`, with the `mean_reversion()` and
    `trend_following()` presets. The module also provides `VwapCalculator`.
  - `DualTimeframeStrategy` in `daytrade.dual_timeframe`. Its `confirm_signal`
    method checks a daily signal against a short-term forecast of minute data.
- **Utilities** (`daytrade.utils`)
  - `generate_test_data` and `generate_daily_data` produce random synthetic
    price series. Both accept an optional `random.Random` for repeatable output.
  - `calculate_basic_performance` runs an all-in/all-out backtest, trading at
    the next day's open.
  - The parameter validators `validate_period`, `validate_positive` and
    `validate_range` raise `ValueError`.
- **Backtesting** (`daytrade.backtest`)
  - `generate_intraday_data` builds five days of deterministic minute data.
  - `run_backtest` prints a strategy's return and signal counts, writes a CSV,
    and returns a `BacktestResult`.
  - `export_signals_to_csv` writes the data and signals to a CSV file.

## Example

```python
from daytrade.crossover import MACrossover
from daytrade.models import Signal
from daytrade.utils import generate_test_data

data = generate_test_data(200, 100.0, 0.05)
strategy = MACrossover(10, 30)

signals = strategy.generate_signals(data)
performance = strategy.calculate_performance(data, signals)

print(f"MA crossover return: {performance:.2f}%")
print("buys:", signals.count(Signal.BUY), "sells:", signals.count(Signal.SELL))
```

Intraday strategies work on `MinuteOhlcv` records:

```python
from daytrade.backtest import generate_intraday_data
from daytrade.vwap import VwapStrategy

minutes = generate_intraday_data()
strategy = VwapStrategy.mean_reversion()
signals = strategy.generate_signals(minutes)
print(strategy.calculate_performance(minutes, signals))
```

## Errors

- A series that is too short for a strategy raises `InsufficientDataError`.
- Most strategies raise `InvalidDataError` when the data and signal lists
  differ in length. `CompositeStrategy` raises `CalculationError` in that case.
- All three errors are subclasses of `TradeError`.

## Intraday backtest command

```
daytrade-backtest [--output-dir DIR]
```

The command builds five days of synthetic minute data. It then backtests four
strategies on that data:

- VWAP mean reversion
- VWAP trend following
- Bollinger Bands mean reversion
- Bollinger Bands volatility breakout

For each strategy it prints the return and the count of each signal type. It
also writes a `<strategy_name>_signals.csv` file, for example
`vwap_mean_reversion_signals.csv`. The file goes to `DIR`, or to the current
directory if `--output-dir` is not given. You can load it into a charting tool.
The command exits with status 1 if a strategy raises a `TradeError`.

## What this package does not do

- It does not read market data from files or fetch it from any service. You
  build `DailyOhlcv` and `MinuteOhlcv` records yourself or use the synthetic
  generators.
- It places no orders and has no live or streaming mode. Strategies work on
  complete lists of records.
- The backtest command runs only on generated data.