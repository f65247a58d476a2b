from deckscribe.services.buylist_formatter import (
    format_buylist,
    format_count_summary,
    format_price,
    format_value_summary,
)
from deckscribe.services.card_fetcher import (
    CardDataFetchError,
    build_batches,
    fetch_card_metadata,
)
from deckscribe.services.collection_store import CollectionStore, get_collection_store
from deckscribe.services.renderer import render_decklist

__all__ = [
    "CardDataFetchError",
    "CollectionStore",
    "build_batches",
    "fetch_card_metadata",
    "format_buylist",
    "format_count_summary",
    "format_price",
    "format_value_summary",
    "get_collection_store",
    "render_decklist",
]
