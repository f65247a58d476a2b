"""
Parser for collection CSV files.

Expected columns (matched case-insensitively, configurable names):
    Name,Count
    "Lightning Bolt",4
    "Fire // Ice",2

Counts are summed by card identity, so different printings of the same card
add up.
"""

import csv
import logging
from io import StringIO

from deckscribe.models.identity import name_to_id

logger = logging.getLogger(__name__)


def _find_column(fieldnames: list[str], wanted: str) -> str | None:
    for col in fieldnames:
        if col.strip().lower() == wanted.strip().lower():
            return col
    return None


def parse_collection_csv(
    text: str,
    name_column: str = "Name",
    count_column: str = "Count",
) -> dict[str, int]:
    """
    Parse collection CSV text into owned counts.

    Args:
        text: Raw CSV text with a header row
        name_column: Header of the card name column
        count_column: Header of the quantity column

    Returns:
        Dict mapping card identities to owned counts. Rows without a name or
        with a non-numeric count are skipped.
    """
    counts: dict[str, int] = {}

    reader = csv.DictReader(StringIO(text))
    if not reader.fieldnames:
        return counts

    name_col = _find_column(list(reader.fieldnames), name_column)
    count_col = _find_column(list(reader.fieldnames), count_column)
    if name_col is None or count_col is None:
        logger.warning(
            "Collection CSV is missing columns %r/%r (found %s)",
            name_column,
            count_column,
            reader.fieldnames,
        )
        return counts

    for row in reader:
        name = (row.get(name_col) or "").strip()
        if not name:
            continue

        try:
            quantity = int((row.get(count_col) or "").strip())
        except ValueError:
            logger.debug("Skipping row with invalid count: %s", row)
            continue
        if quantity < 0:
            continue

        identity = name_to_id(name)
        counts[identity] = counts.get(identity, 0) + quantity

    return counts
