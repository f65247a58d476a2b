"""
Section and document totals.

Card counts, values in the preferred currency, and what is missing from the
collection. A card is only ever missing when a collection is loaded: lines
without a ``global_count`` contribute nothing to the missing counts.
"""

from deckscribe.config import DecklistSettings
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.document import Aggregates, BuylistEntry, Section
from deckscribe.models.identity import name_to_id


def get_card_price(
    card_name: str | None,
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
) -> float | None:
    """
    Unit price of a card in the preferred currency.

    Returns None when prices are hidden, metadata is missing, or the card has
    no price in that currency.
    """
    card_data = card_data_by_id.get(name_to_id(card_name))
    if card_data is None or settings.hide_prices:
        return None
    return card_data.price(settings.preferred_currency)


def aggregate_section(
    section: Section,
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
) -> Aggregates:
    """
    Total up one section.

    Only card lines count; commanders, comments and errors are ignored.
    """
    totals = Aggregates()

    for line in section.card_lines():
        count = line.card_count or 0
        price = get_card_price(line.card_name, card_data_by_id, settings)

        totals.total_count += count
        if price is not None:
            totals.total_value += count * price

        # A line without a card name has nothing to buy
        identity = name_to_id(line.card_name)
        missing = line.missing_count
        if missing and identity:
            totals.missing[identity] = totals.missing.get(identity, 0) + missing

    totals.missing_value = sum(
        qty * (get_card_price(identity, card_data_by_id, settings) or 0.0)
        for identity, qty in totals.missing.items()
    )
    return totals


def merge_aggregates(parts: list[Aggregates]) -> Aggregates:
    """Sum several aggregates, merging missing counts by identity."""
    merged = Aggregates()
    for part in parts:
        merged.total_count += part.total_count
        merged.total_value += part.total_value
        merged.missing_value += part.missing_value
        for identity, qty in part.missing.items():
            merged.missing[identity] = merged.missing.get(identity, 0) + qty
    return merged


def build_buylist(
    missing: dict[str, int],
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
) -> list[BuylistEntry]:
    """
    Turn missing counts into buylist entries.

    Entries keep the order in which cards were first found missing. Cards
    without metadata are listed under their identity.
    """
    entries: list[BuylistEntry] = []
    for identity, quantity in missing.items():
        card_data = card_data_by_id.get(identity)
        entries.append(
            BuylistEntry(
                identity=identity,
                name=card_data.name if card_data is not None else identity,
                quantity=quantity,
                unit_price=get_card_price(identity, card_data_by_id, settings),
            )
        )
    return entries


def aggregate_document(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
) -> tuple[dict[str, Aggregates], Aggregates, list[BuylistEntry]]:
    """
    Total up every section and build the consolidated buylist.

    Returns:
        (totals per section name, overall totals, buylist)
    """
    section_totals = {
        section.name: aggregate_section(section, card_data_by_id, settings)
        for section in sections
    }
    totals = merge_aggregates(list(section_totals.values()))
    buylist = build_buylist(totals.missing, card_data_by_id, settings)
    return section_totals, totals, buylist
