from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class CollectionSettings(BaseModel):
    """Where collection CSV files live and how to read them."""

    file_extension: str = ".mtg.collection.csv"
    name_column: str = "Name"
    count_column: str = "Count"
    directory: Path | None = None


class DecklistSettings(BaseModel):
    """Display and organization options for rendered card lists."""

    preferred_currency: Literal["usd", "eur", "tix"] = "usd"
    show_card_names_as_hyperlinks: bool = True
    show_card_previews: bool = True
    show_buylist: bool = True
    hide_prices: bool = False

    # Compact layout; implies grouping by type and sorting by mana cost
    mobile_mode: bool = False

    enable_advanced_features: bool = True
    group_by_type: bool = False
    sort_by_mana_cost: bool = False
    show_search_filter: bool = False

    show_statistics: bool = False
    show_mana_curve_chart: bool = True
    show_type_distribution_chart: bool = True
    show_color_distribution_chart: bool = True

    @property
    def groups_by_type(self) -> bool:
        return (self.enable_advanced_features and self.group_by_type) or self.mobile_mode

    @property
    def sorts_by_cost(self) -> bool:
        return self.sort_by_mana_cost or self.mobile_mode


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DECKSCRIBE_",
        env_nested_delimiter="__",
    )

    app_name: str = "Deckscribe"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"
    request_timeout: float = 30.0

    collection: CollectionSettings = CollectionSettings()
    decklist: DecklistSettings = DecklistSettings()


settings = Settings()


# =============================================================================
# PARSING CONSTANTS
# =============================================================================

DEFAULT_DECK_SECTION_NAME = "Deck:"
DEFAULT_LIST_SECTION_NAME = "Cards:"
COMMANDER_SECTION_NAME = "Commander"

# Scryfall's /cards/collection endpoint accepts at most 75 identifiers
MAX_BATCH_SIZE = 75
