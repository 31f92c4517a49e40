"""TradeJournal - performance analytics for closed trades."""

__version__ = "0.1.0"
