"""
Collection store.

Keeps the owned card counts in memory, rebuilt from the collection CSV files
found in a directory. Whatever watches those files for changes calls
``sync`` again; the store itself does not watch anything.
"""

import logging
from pathlib import Path

from deckscribe.config import CollectionSettings, settings
from deckscribe.models.collection import CollectionCounts
from deckscribe.parsers.collection_csv import parse_collection_csv

logger = logging.getLogger(__name__)


class CollectionStore:
    """In-memory collection counts backed by CSV files."""

    def __init__(self, collection_settings: CollectionSettings | None = None) -> None:
        self.settings = collection_settings or settings.collection
        self.counts = CollectionCounts()

    def is_collection_file(self, path: Path) -> bool:
        """True if a changed file should trigger a resync."""
        return path.name.endswith(self.settings.file_extension)

    def collection_files(self, directory: Path) -> list[Path]:
        """Collection files under a directory, sorted for stable merging."""
        return sorted(p for p in directory.rglob("*") if p.is_file() and self.is_collection_file(p))

    def sync(self, directory: Path | None = None) -> CollectionCounts:
        """
        Rebuild counts from every collection file in a directory.

        Counts for the same card in several files are added together. The
        previous counts are replaced only once every file has been read.

        Args:
            directory: Directory to scan. Defaults to the configured one.

        Returns:
            The new counts (empty if no directory is configured)
        """
        directory = directory or self.settings.directory
        if directory is None:
            logger.info("No collection directory configured")
            self.counts = CollectionCounts()
            return self.counts

        counts = CollectionCounts()
        files = self.collection_files(directory)
        for path in files:
            parsed = parse_collection_csv(
                path.read_text(encoding="utf-8"),
                name_column=self.settings.name_column,
                count_column=self.settings.count_column,
            )
            for identity, quantity in parsed.items():
                counts.cards[identity] = counts.cards.get(identity, 0) + quantity

        logger.info(
            "Synced %d unique cards from %d collection files in %s",
            counts.unique_cards(),
            len(files),
            directory,
        )
        self.counts = counts
        return counts


collection_store = CollectionStore()


def get_collection_store() -> CollectionStore:
    """Dependency that provides the application's collection store."""
    return collection_store
