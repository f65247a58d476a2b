from dataclasses import dataclass, field

from deckscribe.models.identity import name_to_id


@dataclass
class CollectionCounts:
    """
    Owned card counts keyed by card identity.

    An empty collection means no collection is loaded at all, which is
    different from a loaded collection that lacks a card (count 0).
    """

    cards: dict[str, int] = field(default_factory=dict)

    def has_data(self) -> bool:
        """True if any collection data is loaded."""
        return bool(self.cards)

    def get(self, identity: str) -> int | None:
        """Owned count for an identity, None when no collection is loaded."""
        if not self.cards:
            return None
        return self.cards.get(identity, 0)

    def add_card(self, card_name: str, quantity: int = 1) -> None:
        """Add copies of a card, keyed by its identity."""
        identity = name_to_id(card_name)
        self.cards[identity] = self.cards.get(identity, 0) + quantity

    def total_cards(self) -> int:
        """Total number of cards in collection."""
        return sum(self.cards.values())

    def unique_cards(self) -> int:
        """Number of unique cards in collection."""
        return len(self.cards)
