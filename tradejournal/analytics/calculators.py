"""Per-trade calculators used by the trade form.

Both functions take raw form values (strings or numbers) and never raise;
bad input produces "N/A" or None.
"""

from typing import Any, Optional

from tradejournal.parsing import to_number

GOLD_SYMBOL = "XAUUSD"

# A standard gold lot is 100 oz
GOLD_MULTIPLIER = 100

# A standard forex lot is 100,000 units of the base currency
FOREX_MULTIPLIER = 100000


def contract_multiplier(pair: str) -> int:
    """Units per lot for a pair."""
    if pair.strip().upper() == GOLD_SYMBOL:
        return GOLD_MULTIPLIER
    return FOREX_MULTIPLIER


def risk_reward(entry_price: Any, stop_loss: Any, take_profit: Any) -> str:
    """Reward-to-risk ratio of a planned trade.

    Args:
        entry_price: Entry price.
        stop_loss: Stop loss price.
        take_profit: Take profit price.

    Returns:
        |take_profit - entry| / |entry - stop_loss| formatted to 2 decimals,
        or "N/A" if any price is non-numeric or the risk is zero.
    """
    entry = to_number(entry_price, "entry_price")
    stop = to_number(stop_loss, "stop_loss")
    target = to_number(take_profit, "take_profit")

    if entry is None or stop is None or target is None:
        return "N/A"

    risk = abs(entry - stop)
    if risk == 0:
        return "N/A"

    reward = abs(target - entry)
    return f"{reward / risk:.2f}"


def profit_loss(
    lot_size: Any,
    direction: Any,
    entry_price: Any,
    exit_price: Any,
    pair: Any,
) -> Optional[str]:
    """Realized P&L of a closed trade in account currency.

    Args:
        lot_size: Position size in lots.
        direction: "Buy" or "Sell".
        entry_price: Entry price.
        exit_price: Exit price.
        pair: Instrument symbol; XAUUSD uses the gold multiplier.

    Returns:
        P&L formatted to 2 decimals, or None when an input is missing
        or the direction is unknown.
    """
    lot = to_number(lot_size, "lot_size")
    entry = to_number(entry_price, "entry_price")
    exit_ = to_number(exit_price, "exit_price")

    if lot is None or entry is None or exit_ is None:
        return None
    if not isinstance(pair, str) or not pair.strip():
        return None

    if direction == "Buy":
        move = exit_ - entry
    elif direction == "Sell":
        move = entry - exit_
    else:
        return None

    result = move * lot * contract_multiplier(pair)
    if result == 0:
        result = 0.0  # avoid "-0.00"
    return f"{result:.2f}"
