"""Portfolio League - group portfolio tracking, valuation history and seasons."""

__version__ = "0.1.0"
