from deckscribe.parsers.collection_csv import parse_collection_csv
from deckscribe.parsers.decklist import (
    classify_line,
    distinct_card_names,
    parse_card_line,
    parse_lines,
    parse_source,
)

__all__ = [
    "classify_line",
    "distinct_card_names",
    "parse_card_line",
    "parse_collection_csv",
    "parse_lines",
    "parse_source",
]
