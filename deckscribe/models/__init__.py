from deckscribe.models.card_data import CURRENCY_SYMBOLS, CardMetadata, Currency
from deckscribe.models.collection import CollectionCounts
from deckscribe.models.document import (
    Aggregates,
    BuylistEntry,
    DeckStatistics,
    ExportCard,
    OrganizedDocument,
    Section,
)
from deckscribe.models.identity import name_to_id
from deckscribe.models.line import Line, LineKind

__all__ = [
    "Aggregates",
    "BuylistEntry",
    "CURRENCY_SYMBOLS",
    "CardMetadata",
    "CollectionCounts",
    "Currency",
    "DeckStatistics",
    "ExportCard",
    "Line",
    "LineKind",
    "OrganizedDocument",
    "Section",
    "name_to_id",
]
