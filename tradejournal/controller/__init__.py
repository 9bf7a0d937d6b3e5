"""Form controllers for TradeJournal."""

from tradejournal.controller.base import FormState, RecordForm
from tradejournal.controller.trade_form import FIELDS as TRADE_FIELDS
from tradejournal.controller.trade_form import REQUIRED_FIELDS, TradeForm
from tradejournal.controller.strategy_form import StrategyForm

__all__ = [
    "FormState",
    "RecordForm",
    "TRADE_FIELDS",
    "REQUIRED_FIELDS",
    "TradeForm",
    "StrategyForm",
]
