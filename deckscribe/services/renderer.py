"""
Card list rendering pipeline.

Turns the source text of a deck or list block into an OrganizedDocument:

    source -> lines -> sections -> (fetch metadata) -> organized sections
           -> totals + buylist -> statistics

Fetching metadata is the only step that waits on I/O. When it fails the
document is still built, just without prices, images, grouping by type or
color, and statistics histograms.
"""

import logging
from collections.abc import Awaitable, Callable

import httpx

from deckscribe.analysis.aggregator import aggregate_document, get_card_price
from deckscribe.analysis.groups import lookup_card
from deckscribe.analysis.organizer import organize_sections
from deckscribe.analysis.sections import group_sections
from deckscribe.analysis.statistics import calculate_deck_statistics
from deckscribe.config import (
    DEFAULT_DECK_SECTION_NAME,
    DEFAULT_LIST_SECTION_NAME,
    DecklistSettings,
)
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.collection import CollectionCounts
from deckscribe.models.document import ExportCard, OrganizedDocument, Section
from deckscribe.parsers.decklist import distinct_card_names, parse_source
from deckscribe.services.card_fetcher import CardDataFetchError, fetch_card_metadata

logger = logging.getLogger(__name__)

CardDataFetcher = Callable[[list[str]], Awaitable[dict[str, CardMetadata]]]


def build_export_images(
    sections: list[Section],
    card_data_by_id: dict[str, CardMetadata],
    settings: DecklistSettings,
) -> list[ExportCard]:
    """
    Card lines with metadata, in display order, for image export.

    Lines whose card could not be resolved are left out.
    """
    exports: list[ExportCard] = []
    for section in sections:
        for line in section.lines:
            if not (line.is_card or line.is_commander):
                continue
            card_data = lookup_card(line, card_data_by_id)
            if card_data is None:
                continue
            exports.append(
                ExportCard(
                    name=card_data.name,
                    count=line.card_count or 0,
                    image_uris=card_data.image_uris,
                    unit_price=get_card_price(line.card_name, card_data_by_id, settings),
                    metadata=card_data,
                )
            )
    return exports


async def render_decklist(
    source: str,
    collection: CollectionCounts,
    settings: DecklistSettings,
    fetcher: CardDataFetcher = fetch_card_metadata,
    is_generic_list: bool = False,
) -> OrganizedDocument:
    """
    Build the organized document for a deck or list block.

    Args:
        source: Raw block text
        collection: Owned card counts (read only)
        settings: Decklist display settings
        fetcher: Batch metadata lookup, keyed by card identity
        is_generic_list: True for generic lists, which group by color and
            have no commander

    Returns:
        A new OrganizedDocument. The buylist is left empty when
        ``show_buylist`` is off, and statistics are only computed when
        ``show_statistics`` is on. Totals are always filled in.

    Raises:
        Anything unexpected from the pipeline. Only metadata fetch failures
        are absorbed.
    """
    default_section_name = (
        DEFAULT_LIST_SECTION_NAME if is_generic_list else DEFAULT_DECK_SECTION_NAME
    )

    lines = parse_source(source, collection)
    sections = group_sections(lines, default_section_name)

    card_data_by_id: dict[str, CardMetadata] = {}
    try:
        card_data_by_id = await fetcher(distinct_card_names(lines))
    except (CardDataFetchError, httpx.HTTPError) as e:
        logger.warning("Error fetching card data, rendering without it: %s", e)

    sections, commanders = organize_sections(
        sections,
        card_data_by_id,
        settings,
        default_section_name,
        is_generic_list=is_generic_list,
    )

    section_totals, totals, buylist = aggregate_document(sections, card_data_by_id, settings)
    if not settings.show_buylist:
        buylist = []

    statistics = None
    if settings.show_statistics:
        statistics = calculate_deck_statistics(lines, card_data_by_id)

    return OrganizedDocument(
        is_generic_list=is_generic_list,
        sections=sections,
        commanders=commanders,
        section_totals=section_totals,
        totals=totals,
        buylist=buylist,
        statistics=statistics,
        card_data=card_data_by_id,
        export_images=build_export_images(sections, card_data_by_id, settings),
        preferred_currency=settings.preferred_currency,
    )
