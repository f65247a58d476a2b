"""
Print the buylist for a decklist file.

Syncs the collection, renders the decklist and prints the cards still
missing from the collection, one "<quantity> <name>" line each.

Usage:
    python -m deckscribe.jobs.buylist decks/atraxa.txt --collection ~/cards
"""

import argparse
import asyncio
import logging
from pathlib import Path

from deckscribe.config import settings
from deckscribe.services.buylist_formatter import format_buylist, format_price
from deckscribe.services.collection_store import CollectionStore
from deckscribe.services.renderer import render_decklist

logger = logging.getLogger(__name__)


async def run_buylist(deck_path: Path, collection_dir: Path | None = None) -> str:
    """
    Build the buylist text for a decklist file.

    Args:
        deck_path: Path to a file in card-list notation
        collection_dir: Directory of collection CSV files. Defaults to the
            configured collection directory.

    Returns:
        Buylist text followed by a total line
    """
    store = CollectionStore(settings.collection)
    store.sync(collection_dir)

    if not store.counts.has_data():
        logger.warning("No collection loaded; nothing can be missing")

    # Always list what is missing, whatever the display settings say
    decklist_settings = settings.decklist.model_copy(update={"show_buylist": True})
    document = await render_decklist(
        deck_path.read_text(encoding="utf-8"),
        store.counts,
        decklist_settings,
    )
    logger.info(
        "Rendered %d sections, %d cards missing",
        len(document.sections),
        document.buylist_count,
    )

    total = f"{document.buylist_count} cards"
    if document.has_card_info and not decklist_settings.hide_prices:
        total += f" {format_price(document.buylist_value, document.preferred_currency)}"
    return format_buylist(document.buylist) + total


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Print the buylist for a decklist")
    parser.add_argument("deck", type=Path, help="Decklist file")
    parser.add_argument("--collection", type=Path, default=None, help="Collection directory")
    args = parser.parse_args()

    print(asyncio.run(run_buylist(args.deck, args.collection)))


if __name__ == "__main__":
    main()
