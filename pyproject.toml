[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "daytrade"
version = "0.1.0"
description = "Day trading strategies, indicators and backtesting for daily and minute OHLCV data"
requires-python = ">=3.10"
dependencies = []
keywords = ["trading", "backtesting", "ohlcv", "vwap", "bollinger", "rsi", "macd", "indicators"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
daytrade-backtest = "daytrade.backtest:main"

[tool.hatch.build.targets.wheel]
packages = ["daytrade"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
