"""
Organized document model.

The structure handed to whatever presents a card list: ordered sections,
totals, the buylist and deck statistics. Built fresh for every render.
"""

from dataclasses import dataclass, field

from deckscribe.models.card_data import CardMetadata
from deckscribe.models.line import Line


@dataclass
class Section:
    """A named, ordered run of lines."""

    name: str
    lines: list[Line] = field(default_factory=list)

    def card_lines(self) -> list[Line]:
        return [line for line in self.lines if line.is_card]


@dataclass
class Aggregates:
    """
    Totals for a section (or a whole document).

    Attributes:
        total_count: Copies required across card lines
        total_value: Value of the required copies in the preferred currency
        missing: Copies still needed, keyed by card identity
        missing_value: Value of exactly the missing copies
    """

    total_count: int = 0
    total_value: float = 0.0
    missing: dict[str, int] = field(default_factory=dict)
    missing_value: float = 0.0

    @property
    def missing_count(self) -> int:
        return sum(self.missing.values())

    @property
    def has_missing(self) -> bool:
        return bool(self.missing)

    @property
    def owned_count(self) -> int:
        """Required copies that are already owned."""
        return self.total_count - self.missing_count

    @property
    def owned_value(self) -> float:
        """Value of the required copies that are already owned."""
        return self.total_value - self.missing_value


@dataclass
class BuylistEntry:
    """A card that still has to be acquired."""

    identity: str
    name: str
    quantity: int
    unit_price: float | None = None

    @property
    def total_price(self) -> float:
        return (self.unit_price or 0.0) * self.quantity


@dataclass
class DeckStatistics:
    """
    Histograms over a deck.

    Cost keys are integer costs with 7 meaning "7 or more". Color channels are
    W, U, B, R, G and C for colorless spells.
    """

    mana_curve: dict[int, int] = field(default_factory=dict)
    type_distribution: dict[str, int] = field(default_factory=dict)
    color_distribution: dict[str, dict[int, int]] = field(default_factory=dict)
    total_cards: int = 0


@dataclass
class ExportCard:
    """A card line resolved for image export."""

    name: str
    count: int
    image_uris: tuple[str, ...] = ()
    unit_price: float | None = None
    metadata: CardMetadata | None = None


@dataclass
class OrganizedDocument:
    """A fully organized card list ready for presentation."""

    is_generic_list: bool
    sections: list[Section] = field(default_factory=list)
    commanders: list[Line] = field(default_factory=list)
    section_totals: dict[str, Aggregates] = field(default_factory=dict)
    totals: Aggregates = field(default_factory=Aggregates)
    buylist: list[BuylistEntry] = field(default_factory=list)
    statistics: DeckStatistics | None = None
    card_data: dict[str, CardMetadata] = field(default_factory=dict)
    export_images: list[ExportCard] = field(default_factory=list)
    preferred_currency: str = "usd"

    @property
    def has_card_info(self) -> bool:
        """True if metadata was found for at least one card."""
        return bool(self.card_data)

    @property
    def buylist_count(self) -> int:
        return sum(entry.quantity for entry in self.buylist)

    @property
    def buylist_value(self) -> float:
        return sum(entry.total_price for entry in self.buylist)

    def section(self, name: str) -> Section | None:
        """Look up a section by name."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]
