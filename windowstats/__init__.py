"""windowstats – windowed statistics services.

Two small HTTP services built on a shared statistics core:

- the average calculator (:mod:`windowstats.numbers`), which keeps a
  bounded, deduplicated window of numbers and reports its average;
- the stock price aggregator (:mod:`windowstats.stocks`), which reports
  average prices and the correlation of two tickers.
"""

__version__ = "0.1.0"
