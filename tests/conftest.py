import pytest

from deckscribe.config import DecklistSettings
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.collection import CollectionCounts
from deckscribe.models.identity import name_to_id


def make_card(
    name: str,
    type_line: str,
    cmc: float,
    colors: tuple[str, ...] = (),
    usd: str | None = None,
    eur: str | None = None,
) -> CardMetadata:
    return CardMetadata(
        name=name,
        type_line=type_line,
        cmc=cmc,
        color_identity=colors,
        prices={"usd": usd, "eur": eur, "tix": None},
        purchase_uri=f"https://scryfall.com/card/{name_to_id(name).replace(' ', '-')}",
        image_uris=(f"https://cards.scryfall.io/large/{name_to_id(name)}.jpg",),
    )


@pytest.fixture
def card_data_by_id() -> dict[str, CardMetadata]:
    """Metadata for the cards used across tests, keyed by identity."""
    cards = [
        make_card("Lightning Bolt", "Instant", 1.0, ("R",), usd="2.00", eur="1.50"),
        make_card("Monastery Swiftspear", "Creature — Human Monk", 1.0, ("R",), usd="0.50"),
        make_card("Counterspell", "Instant", 2.0, ("U",), usd="1.00"),
        make_card(
            "Atraxa, Praetors' Voice",
            "Legendary Creature — Phyrexian Angel Horror",
            4.0,
            ("W", "U", "B", "G"),
            usd="10.00",
        ),
        make_card("Forest", "Basic Land — Forest", 0.0, (), usd="0.10"),
        make_card("Sol Ring", "Artifact", 1.0, (), usd="1.50"),
        make_card("Absorb", "Instant", 3.0, ("W", "U"), usd="0.25"),
        make_card("Emrakul, the Aeons Torn", "Legendary Creature — Eldrazi", 15.0, (), usd="20.00"),
        make_card("Fire // Ice", "Instant // Instant", 4.0, ("U", "R"), usd="0.30"),
        make_card("Hallowed Fountain", "Land — Plains Island", 0.0, ("W", "U"), usd="8.00"),
    ]
    return {name_to_id(card.name): card for card in cards}


@pytest.fixture
def empty_collection() -> CollectionCounts:
    return CollectionCounts()


@pytest.fixture
def collection() -> CollectionCounts:
    """A loaded collection owning some, but not all, test cards."""
    return CollectionCounts(
        cards={
            "lightning bolt": 2,
            "monastery swiftspear": 4,
            "forest": 10,
            "fire": 1,
        }
    )


@pytest.fixture
def decklist_settings() -> DecklistSettings:
    return DecklistSettings()


@pytest.fixture
def sample_decklist() -> str:
    """Sample decklist using most of the notation."""
    return """1 Atraxa, Praetors' Voice *CMDR*
Creatures
4x Monastery Swiftspear (BRO) 144
Spells
4 Lightning Bolt # the best
2 Counterspell
# Lands below
Lands
10 Forest (M21) 250"""
