"""
Decklist rendering endpoints.

Parses and organizes a deck or list block against the loaded collection and
returns the organized document as JSON.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from deckscribe.analysis.aggregator import get_card_price
from deckscribe.analysis.groups import lookup_card
from deckscribe.config import DecklistSettings, settings
from deckscribe.models.document import Aggregates, OrganizedDocument
from deckscribe.models.line import Line
from deckscribe.services.buylist_formatter import (
    format_buylist,
    format_count_summary,
    format_value_summary,
)
from deckscribe.services.card_fetcher import fetch_card_metadata
from deckscribe.services.collection_store import CollectionStore, get_collection_store
from deckscribe.services.renderer import CardDataFetcher, render_decklist

logger = logging.getLogger(__name__)

router = APIRouter(tags=["decklists"])


def get_card_fetcher() -> CardDataFetcher:
    """Dependency that provides the card metadata fetcher."""
    return fetch_card_metadata


class RenderRequest(BaseModel):
    """Request model for rendering a card list."""

    source: str = Field(
        ...,
        description="Raw card list text, one entry per line",
        examples=["Creatures\n4x Monastery Swiftspear\n1 Atraxa, Praetors' Voice *CMDR*"],
    )
    settings: DecklistSettings | None = Field(
        default=None,
        description="Display settings; the configured defaults when omitted",
    )


class LineResponse(BaseModel):
    """A parsed line with its resolved card details."""

    kind: str
    card_count: int | None = None
    global_count: int | None = None
    card_name: str | None = None
    display_name: str | None = None
    purchase_uri: str | None = None
    image_uris: list[str] = Field(default_factory=list)
    unit_price: float | None = None
    comments: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class TotalsResponse(BaseModel):
    """Totals for a section or the whole document."""

    total_count: int
    owned_count: int
    total_value: float
    owned_value: float
    missing: dict[str, int] = Field(default_factory=dict)
    count_text: str
    value_text: str


class SectionResponse(BaseModel):
    """A named section of lines."""

    name: str
    lines: list[LineResponse]
    totals: TotalsResponse


class BuylistEntryResponse(BaseModel):
    """A card still to be acquired."""

    name: str
    quantity: int
    unit_price: float | None = None


class StatisticsResponse(BaseModel):
    """Deck histograms."""

    mana_curve: dict[int, int]
    type_distribution: dict[str, int]
    color_distribution: dict[str, dict[int, int]]
    total_cards: int


class RenderResponse(BaseModel):
    """Response model for a rendered card list."""

    is_generic_list: bool
    has_card_info: bool
    preferred_currency: str
    commanders: list[LineResponse] = Field(default_factory=list)
    sections: list[SectionResponse]
    totals: TotalsResponse
    buylist: list[BuylistEntryResponse] = Field(default_factory=list)
    buylist_text: str = ""
    buylist_count: int = 0
    buylist_value: float = 0.0
    statistics: StatisticsResponse | None = None
    settings: DecklistSettings = Field(
        description="Settings the list was rendered with, including display toggles"
    )


def _line_response(
    line: Line,
    document: OrganizedDocument,
    decklist_settings: DecklistSettings,
) -> LineResponse:
    card_data = lookup_card(line, document.card_data) if line.card_name else None
    if card_data is None:
        return LineResponse(
            kind=line.kind.value,
            card_count=line.card_count,
            global_count=line.global_count,
            card_name=line.card_name,
            display_name=line.card_name,
            comments=line.comments,
            errors=line.errors,
        )

    return LineResponse(
        kind=line.kind.value,
        card_count=line.card_count,
        global_count=line.global_count,
        card_name=line.card_name,
        display_name=card_data.name,
        purchase_uri=card_data.purchase_uri,
        image_uris=list(card_data.image_uris),
        unit_price=get_card_price(line.card_name, document.card_data, decklist_settings),
        comments=line.comments,
        errors=line.errors,
    )


def _totals_response(totals: Aggregates, currency: str) -> TotalsResponse:
    return TotalsResponse(
        total_count=totals.total_count,
        owned_count=totals.owned_count,
        total_value=round(totals.total_value, 2),
        owned_value=round(totals.owned_value, 2),
        missing=totals.missing,
        count_text=format_count_summary(totals),
        value_text=format_value_summary(totals, currency),
    )


def document_to_response(
    document: OrganizedDocument,
    decklist_settings: DecklistSettings,
) -> RenderResponse:
    """Convert an organized document into the API response model."""
    currency = document.preferred_currency
    statistics = document.statistics

    return RenderResponse(
        is_generic_list=document.is_generic_list,
        has_card_info=document.has_card_info,
        preferred_currency=currency,
        commanders=[
            _line_response(line, document, decklist_settings) for line in document.commanders
        ],
        sections=[
            SectionResponse(
                name=section.name,
                lines=[
                    _line_response(line, document, decklist_settings) for line in section.lines
                ],
                totals=_totals_response(document.section_totals[section.name], currency),
            )
            for section in document.sections
        ],
        totals=_totals_response(document.totals, currency),
        buylist=[
            BuylistEntryResponse(
                name=entry.name,
                quantity=entry.quantity,
                unit_price=entry.unit_price,
            )
            for entry in document.buylist
        ],
        buylist_text=format_buylist(document.buylist),
        buylist_count=document.buylist_count,
        buylist_value=round(document.buylist_value, 2),
        statistics=(
            StatisticsResponse(
                mana_curve=statistics.mana_curve,
                type_distribution=statistics.type_distribution,
                color_distribution=statistics.color_distribution,
                total_cards=statistics.total_cards,
            )
            if statistics is not None
            else None
        ),
        settings=decklist_settings,
    )


async def _render(
    request: RenderRequest,
    store: CollectionStore,
    fetcher: CardDataFetcher,
    is_generic_list: bool,
) -> RenderResponse:
    decklist_settings = request.settings or settings.decklist
    try:
        document = await render_decklist(
            request.source,
            store.counts,
            decklist_settings,
            fetcher=fetcher,
            is_generic_list=is_generic_list,
        )
    except Exception as e:
        logger.exception("Failed to render card list")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to render card list: {e}",
        ) from e

    return document_to_response(document, decklist_settings)


@router.post("/decklists/render", response_model=RenderResponse)
async def render_deck(
    request: RenderRequest,
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    fetcher: Annotated[CardDataFetcher, Depends(get_card_fetcher)],
) -> RenderResponse:
    """
    Render a decklist.

    Commanders are pulled into their own section; grouping and sorting follow
    the decklist settings.
    """
    return await _render(request, store, fetcher, is_generic_list=False)


@router.post("/lists/render", response_model=RenderResponse)
async def render_list(
    request: RenderRequest,
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    fetcher: Annotated[CardDataFetcher, Depends(get_card_fetcher)],
) -> RenderResponse:
    """
    Render a generic card list.

    Cards are grouped by color identity and sorted by name.
    """
    return await _render(request, store, fetcher, is_generic_list=True)
