from dataclasses import dataclass, field
from typing import Any, Literal

Currency = Literal["usd", "eur", "tix"]

CURRENCY_SYMBOLS: dict[str, str] = {
    "usd": "$",
    "eur": "€",
    "tix": "Tx",
}


@dataclass(frozen=True, slots=True)
class CardMetadata:
    """
    Card metadata fetched from Scryfall.

    Attributes:
        name: Canonical card name (e.g., "Fire // Ice")
        type_line: Full type line (e.g., "Creature — Human Wizard")
        cmc: Converted mana cost
        color_identity: Color symbols from W, U, B, R, G
        prices: Price strings keyed by currency, as Scryfall reports them
        purchase_uri: Link to the card's page
        image_uris: Large image for each face, front first (at most two)
    """

    name: str
    type_line: str = ""
    cmc: float = 0.0
    color_identity: tuple[str, ...] = ()
    prices: dict[str, str | None] = field(default_factory=dict)
    purchase_uri: str | None = None
    image_uris: tuple[str, ...] = ()

    def price(self, currency: Currency) -> float | None:
        """Unit price in the given currency, None when unknown."""
        raw = self.prices.get(currency)
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            return None

    @property
    def image_uri(self) -> str | None:
        """Front face image."""
        return self.image_uris[0] if self.image_uris else None

    @classmethod
    def from_scryfall(cls, card: dict[str, Any]) -> "CardMetadata":
        """Build metadata from a Scryfall card object."""
        images: list[str] = []
        top_level = (card.get("image_uris") or {}).get("large")
        if top_level:
            images.append(top_level)
        else:
            for face in (card.get("card_faces") or [])[:2]:
                face_image = (face.get("image_uris") or {}).get("large")
                if face_image:
                    images.append(face_image)

        prices = card.get("prices") or {}

        return cls(
            name=card.get("name", ""),
            type_line=card.get("type_line") or "",
            cmc=float(card.get("cmc") or 0.0),
            color_identity=tuple(card.get("color_identity") or ()),
            prices={currency: prices.get(currency) for currency in CURRENCY_SYMBOLS},
            purchase_uri=card.get("scryfall_uri"),
            image_uris=tuple(images),
        )
