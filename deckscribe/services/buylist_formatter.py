"""
Buylist and totals text.

Formats the numbers the aggregator produces into the short strings shown next
to sections and in the copyable buylist block.
"""

from deckscribe.models.card_data import CURRENCY_SYMBOLS
from deckscribe.models.document import Aggregates, BuylistEntry


def format_price(amount: float, currency: str) -> str:
    """Format an amount with its currency symbol (e.g., "$1.50")."""
    return f"{CURRENCY_SYMBOLS.get(currency, '')}{amount:.2f}"


def format_buylist(entries: list[BuylistEntry]) -> str:
    """Format a buylist as "<quantity> <name>" lines, ready to paste into a store."""
    return "".join(f"{entry.quantity} {entry.name}\n" for entry in entries)


def format_count_summary(totals: Aggregates) -> str:
    """Card count, shown as "owned / required" when cards are missing."""
    if totals.has_missing:
        return f"{totals.owned_count} / {totals.total_count}"
    return f"{totals.total_count}"


def format_value_summary(totals: Aggregates, currency: str) -> str:
    """Section value, shown as "owned / required" when cards are missing."""
    if totals.has_missing:
        owned = format_price(totals.owned_value, currency)
        return f"{owned} / {format_price(totals.total_value, currency)}"
    return format_price(totals.total_value, currency)
