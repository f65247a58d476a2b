"""
Section organization.

Applies the configured structural transforms to sectioned lines, always in
the same order:

1. Commander extraction (decklists only)
2. One of: color grouping (generic lists), type grouping, cost sorting, or
   nothing at all

Every transform takes sections and returns new sections. Missing metadata
never raises; a card without metadata groups as "Other" (type) or "Unknown"
(color) and sorts as cost 0.
"""

import logging
from collections.abc import Callable

from deckscribe.analysis.groups import (
    COLOR_GROUP_ORDER,
    COMMENTS_GROUP,
    TYPE_GROUP_ORDER,
    get_card_type_group,
    get_color_group,
    lookup_card,
    order_section_names,
    sort_cards_by_mana_cost,
    sort_cards_by_name,
)
from deckscribe.config import COMMANDER_SECTION_NAME, DecklistSettings
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.document import Section
from deckscribe.models.line import Line, LineKind

logger = logging.getLogger(__name__)

GroupFunction = Callable[[CardMetadata | None], str]
SortFunction = Callable[[list[Line]], list[Line]]


def extract_commanders(sections: list[Section]) -> tuple[list[Section], list[Line]]:
    """
    Move every commander line into a leading "Commander" section.

    A section already named "Commander" keeps its other lines after the
    commanders. A section that held nothing but commanders is dropped; a
    heading that was empty to begin with is kept. Nothing changes when there
    are no commanders.

    Returns:
        (sections, commander lines)
    """
    commanders: list[Line] = []
    remaining: list[Section] = []

    for section in sections:
        section_commanders = [line for line in section.lines if line.is_commander]
        others = [line for line in section.lines if not line.is_commander]
        commanders.extend(section_commanders)
        if section_commanders and not others:
            continue
        remaining.append(Section(name=section.name, lines=others))

    if not commanders:
        return remaining, commanders

    existing = [s for s in remaining if s.name == COMMANDER_SECTION_NAME]
    others = [s for s in remaining if s.name != COMMANDER_SECTION_NAME]
    commander_section = Section(
        name=COMMANDER_SECTION_NAME,
        lines=commanders + [line for s in existing for line in s.lines],
    )
    return [commander_section, *others], commanders


def _compose_name(section_name: str, group: str, default_section_name: str) -> str:
    if section_name == default_section_name:
        return group
    return f"{section_name} - {group}"


def _regroup(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    default_section_name: str,
    group_card: GroupFunction,
    sort_group: SortFunction | None,
    card_kinds: frozenset[LineKind],
    exempt: frozenset[str] = frozenset(),
) -> dict[str, Section]:
    """
    Split each section's cards into groups and its comments into their own
    section. Other line kinds do not survive regrouping.
    """
    regrouped: dict[str, Section] = {}

    for section in sections:
        if section.name in exempt:
            regrouped[section.name] = Section(name=section.name, lines=list(section.lines))
            continue

        cards = [line for line in section.lines if line.kind in card_kinds]
        comments = [line for line in section.lines if line.kind is LineKind.COMMENT]

        groups: dict[str, list[Line]] = {}
        for card in cards:
            group = group_card(lookup_card(card, card_data_by_id))
            groups.setdefault(group, []).append(card)

        for group, group_cards in groups.items():
            if sort_group is not None:
                group_cards = sort_group(group_cards)
            name = _compose_name(section.name, group, default_section_name)
            regrouped.setdefault(name, Section(name=name)).lines.extend(group_cards)

        if comments:
            name = _compose_name(section.name, COMMENTS_GROUP, default_section_name)
            regrouped.setdefault(name, Section(name=name)).lines.extend(comments)

    return regrouped


def group_by_type(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    default_section_name: str,
    sort_by_cost: bool = False,
) -> list[Section]:
    """
    Regroup decklist sections by card type.

    The Commander section passes through untouched and stays first. Other
    sections follow the type group order.
    """

    def sort_group(cards: list[Line]) -> list[Line]:
        return sort_cards_by_mana_cost(cards, card_data_by_id)

    regrouped = _regroup(
        sections,
        card_data_by_id,
        default_section_name,
        group_card=get_card_type_group,
        sort_group=sort_group if sort_by_cost else None,
        card_kinds=frozenset({LineKind.CARD}),
        exempt=frozenset({COMMANDER_SECTION_NAME}),
    )

    names = order_section_names(
        list(regrouped),
        TYPE_GROUP_ORDER,
        leading=(COMMANDER_SECTION_NAME,),
    )
    return [regrouped[name] for name in names]


def group_by_color(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    default_section_name: str,
) -> list[Section]:
    """
    Regroup generic list sections by color identity.

    Groups are sorted alphabetically and arranged in color priority order.
    Generic lists have no commander section, so commander-marked lines are
    grouped like any other card.
    """
    regrouped = _regroup(
        sections,
        card_data_by_id,
        default_section_name,
        group_card=get_color_group,
        sort_group=sort_cards_by_name,
        card_kinds=frozenset({LineKind.CARD, LineKind.COMMANDER}),
    )

    names = order_section_names(list(regrouped), COLOR_GROUP_ORDER)
    return [regrouped[name] for name in names]


def sort_sections_by_cost(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
) -> list[Section]:
    """
    Sort card lines by mana cost within each section.

    Non-card lines keep their relative order and follow the sorted cards.
    """
    result: list[Section] = []
    for section in sections:
        cards = [line for line in section.lines if line.is_card]
        others = [line for line in section.lines if not line.is_card]
        if cards:
            lines = sort_cards_by_mana_cost(cards, card_data_by_id) + others
        else:
            lines = list(section.lines)
        result.append(Section(name=section.name, lines=lines))
    return result


def organize_sections(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
    default_section_name: str,
    is_generic_list: bool = False,
) -> tuple[list[Section], list[Line]]:
    """
    Apply commander extraction and the configured reorganization.

    Args:
        sections: Sections from ``group_sections``
        card_data_by_id: Metadata keyed by card identity (may be empty)
        settings: Decklist display settings
        default_section_name: Name of the implicit first section
        is_generic_list: Generic lists always group by color and never
            extract commanders

    Returns:
        (organized sections, commander lines)
    """
    if is_generic_list:
        return group_by_color(sections, card_data_by_id, default_section_name), []

    sections, commanders = extract_commanders(sections)

    if settings.groups_by_type:
        logger.debug("Grouping %d sections by card type", len(sections))
        sections = group_by_type(
            sections,
            card_data_by_id,
            default_section_name,
            sort_by_cost=settings.sorts_by_cost,
        )
    elif settings.sorts_by_cost:
        sections = sort_sections_by_cost(sections, card_data_by_id)

    return sections, commanders
