"""
Card grouping tables.

Type groups are used for decklists, color groups for generic lists. Both come
with a fixed display order used to arrange sections after regrouping.
"""

from deckscribe.models.card_data import CardMetadata
from deckscribe.models.identity import name_to_id
from deckscribe.models.line import Line

# Checked in order; the first type found in the type line wins.
# Land comes after the spell types so "Artifact Land" groups as Artifact.
CARD_TYPE_GROUPS: tuple[str, ...] = (
    "Creature",
    "Instant",
    "Sorcery",
    "Artifact",
    "Enchantment",
    "Planeswalker",
    "Land",
    "Battle",
)
OTHER_GROUP = "Other"
TYPE_GROUP_ORDER: tuple[str, ...] = (*CARD_TYPE_GROUPS, OTHER_GROUP)

COMMENTS_GROUP = "Comments"

COLORLESS_GROUP = "Colorless"
LANDS_GROUP = "Lands"
UNKNOWN_GROUP = "Unknown"
FOUR_COLOR_GROUP = "Four-Color"
FIVE_COLOR_GROUP = "Five-Color"

MONO_COLOR_NAMES: dict[str, str] = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}

GUILD_NAMES: dict[frozenset[str], str] = {
    frozenset({"W", "U"}): "Azorius (W/U)",
    frozenset({"U", "B"}): "Dimir (U/B)",
    frozenset({"B", "R"}): "Rakdos (B/R)",
    frozenset({"R", "G"}): "Gruul (R/G)",
    frozenset({"G", "W"}): "Selesnya (G/W)",
    frozenset({"W", "B"}): "Orzhov (W/B)",
    frozenset({"U", "R"}): "Izzet (U/R)",
    frozenset({"B", "G"}): "Golgari (B/G)",
    frozenset({"R", "W"}): "Boros (R/W)",
    frozenset({"G", "U"}): "Simic (G/U)",
}

TRIAD_NAMES: dict[frozenset[str], str] = {
    frozenset({"W", "U", "B"}): "Esper (W/U/B)",
    frozenset({"U", "B", "R"}): "Grixis (U/B/R)",
    frozenset({"B", "R", "G"}): "Jund (B/R/G)",
    frozenset({"R", "G", "W"}): "Naya (R/G/W)",
    frozenset({"G", "W", "U"}): "Bant (G/W/U)",
    frozenset({"W", "B", "G"}): "Abzan (W/B/G)",
    frozenset({"U", "R", "W"}): "Jeskai (U/R/W)",
    frozenset({"B", "G", "U"}): "Sultai (B/G/U)",
    frozenset({"R", "W", "B"}): "Mardu (R/W/B)",
    frozenset({"G", "U", "R"}): "Temur (G/U/R)",
}

COLOR_GROUP_ORDER: tuple[str, ...] = (
    *MONO_COLOR_NAMES.values(),
    *GUILD_NAMES.values(),
    *TRIAD_NAMES.values(),
    FOUR_COLOR_GROUP,
    FIVE_COLOR_GROUP,
    COLORLESS_GROUP,
    LANDS_GROUP,
    COMMENTS_GROUP,
)


def get_card_type_group(card_data: CardMetadata | None) -> str:
    """
    Get the type group for a card.

    Returns "Other" for cards without metadata or with an unmatched type line.
    """
    if card_data is None or not card_data.type_line:
        return OTHER_GROUP

    type_line = card_data.type_line.lower()
    for group in CARD_TYPE_GROUPS:
        if group.lower() in type_line:
            return group

    return OTHER_GROUP


def get_color_group(card_data: CardMetadata | None) -> str:
    """
    Get the color group for a card.

    Lands always group as "Lands" whatever their color identity. Cards
    without metadata group as "Unknown".
    """
    if card_data is None:
        return UNKNOWN_GROUP

    if get_card_type_group(card_data) == "Land":
        return LANDS_GROUP

    colors = frozenset(card_data.color_identity)
    if not colors:
        return COLORLESS_GROUP
    if len(colors) == 1:
        (color,) = colors
        return MONO_COLOR_NAMES.get(color, COLORLESS_GROUP)
    if len(colors) == 2:
        return GUILD_NAMES.get(colors, FOUR_COLOR_GROUP)
    if len(colors) == 3:
        return TRIAD_NAMES.get(colors, FOUR_COLOR_GROUP)
    if len(colors) == 4:
        return FOUR_COLOR_GROUP
    return FIVE_COLOR_GROUP


def get_mana_cost(card_data: CardMetadata | None) -> float:
    """Converted mana cost, 0 when metadata is missing."""
    return card_data.cmc if card_data is not None else 0.0


def lookup_card(line: Line, card_data_by_id: dict[str, CardMetadata]) -> CardMetadata | None:
    """Find the metadata for a card line."""
    return card_data_by_id.get(name_to_id(line.card_name))


def sort_cards_by_mana_cost(
    cards: list[Line],
    card_data_by_id: dict[str, CardMetadata],
) -> list[Line]:
    """Sort by ascending mana cost, then case-insensitively by name."""
    return sorted(
        cards,
        key=lambda line: (
            get_mana_cost(lookup_card(line, card_data_by_id)),
            (line.card_name or "").lower(),
        ),
    )


def sort_cards_by_name(cards: list[Line]) -> list[Line]:
    """Sort case-insensitively by display name."""
    return sorted(cards, key=lambda line: (line.card_name or "").lower())


def order_section_names(
    names: list[str],
    group_order: tuple[str, ...],
    leading: tuple[str, ...] = (),
) -> list[str]:
    """
    Order section names by group priority.

    Each group takes its exact-name section first, then every composed
    "<section> - <group>" name in discovery order. Names matching no group
    keep their discovery order at the end.
    """
    ordered: list[str] = [name for name in leading if name in names]

    for group in group_order:
        if group in names and group not in ordered:
            ordered.append(group)
        suffix = f" - {group}"
        for name in names:
            if name.endswith(suffix) and name not in ordered:
                ordered.append(name)

    ordered.extend(name for name in names if name not in ordered)
    return ordered
