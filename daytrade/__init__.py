"""Day trading strategies, streaming indicators and backtesting for daily and minute OHLCV data."""

__version__ = "0.1.0"