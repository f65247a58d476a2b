from deckscribe.analysis.aggregator import (
    aggregate_document,
    aggregate_section,
    build_buylist,
    get_card_price,
)
from deckscribe.analysis.groups import get_card_type_group, get_color_group
from deckscribe.analysis.organizer import organize_sections
from deckscribe.analysis.sections import group_sections
from deckscribe.analysis.statistics import calculate_deck_statistics

__all__ = [
    "aggregate_document",
    "aggregate_section",
    "build_buylist",
    "calculate_deck_statistics",
    "get_card_price",
    "get_card_type_group",
    "get_color_group",
    "group_sections",
    "organize_sections",
]
