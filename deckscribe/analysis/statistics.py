"""
Deck statistics.

Mana curve, type distribution and color distribution by mana cost. Commanders
are not part of the main deck and are left out. Lands are left out of both
cost histograms but counted in the type distribution.
"""

from deckscribe.analysis.groups import get_card_type_group, lookup_card
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.document import DeckStatistics
from deckscribe.models.line import Line

# Costs at or above this are bucketed together ("7+")
MAX_CURVE_COST = 7

COLOR_CHANNELS: tuple[str, ...] = ("W", "U", "B", "R", "G", "C")
COLORLESS_CHANNEL = "C"

COLOR_CHANNEL_NAMES: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
    "C": "Colorless",
}


def curve_bucket(cmc: float) -> int:
    """Integer cost bucket, capped at 7."""
    return min(int(cmc), MAX_CURVE_COST)


def calculate_deck_statistics(
    lines: list[Line],
    card_data_by_id: dict[str, CardMetadata],
) -> DeckStatistics:
    """
    Build histograms over every card line.

    Cards without metadata count toward ``total_cards`` only.
    """
    stats = DeckStatistics(color_distribution={channel: {} for channel in COLOR_CHANNELS})

    for line in lines:
        if not line.is_card:
            continue

        count = line.card_count or 0
        stats.total_cards += count

        card_data = lookup_card(line, card_data_by_id)
        if card_data is None:
            continue

        card_type = get_card_type_group(card_data)
        stats.type_distribution[card_type] = stats.type_distribution.get(card_type, 0) + count

        if card_type == "Land":
            continue

        bucket = curve_bucket(card_data.cmc)
        stats.mana_curve[bucket] = stats.mana_curve.get(bucket, 0) + count

        channels = card_data.color_identity or (COLORLESS_CHANNEL,)
        for color in channels:
            curve = stats.color_distribution.setdefault(color, {})
            curve[bucket] = curve.get(bucket, 0) + count

    return stats
