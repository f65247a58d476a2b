from dataclasses import dataclass, field
from enum import Enum


class LineKind(str, Enum):
    """What a single line of card-list text turned out to be."""

    CARD = "card"
    SECTION = "section"
    COMMENT = "comment"
    BLANK = "blank"
    COMMANDER = "commander"
    ERROR = "error"


@dataclass
class Line:
    """
    One parsed line of card-list text.

    Attributes:
        kind: Classification of the line
        card_count: Copies requested (card and commander lines only)
        global_count: Copies owned according to the collection, or None when
            no collection is loaded at all (0 means "loaded, none owned")
        card_name: Display name exactly as written, not normalized
        comments: Trailing comment fragments, in order
        errors: Human-readable parse failures for this line
        text: Heading text (section lines only)
    """

    kind: LineKind
    card_count: int | None = None
    global_count: int | None = None
    card_name: str | None = None
    comments: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    text: str | None = None

    @property
    def is_card(self) -> bool:
        return self.kind is LineKind.CARD

    @property
    def is_commander(self) -> bool:
        return self.kind is LineKind.COMMANDER

    @property
    def missing_count(self) -> int:
        """Copies still needed, 0 when nothing is tracked for this card."""
        if self.global_count is None or self.card_count is None:
            return 0
        return max(0, self.card_count - self.global_count)
