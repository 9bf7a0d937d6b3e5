"""TradeJournal - forex and gold trading journal with P&L analytics."""

__version__ = "0.1.0"
