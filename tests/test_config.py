from pathlib import Path

import pytest

from deckscribe.config import DecklistSettings, Settings


class TestDecklistSettings:
    def test_defaults_leave_lists_alone(self) -> None:
        settings = DecklistSettings()

        assert not settings.groups_by_type
        assert not settings.sorts_by_cost
        assert settings.preferred_currency == "usd"

    def test_group_by_type_needs_advanced_features(self) -> None:
        assert DecklistSettings(group_by_type=True).groups_by_type
        assert not DecklistSettings(group_by_type=True, enable_advanced_features=False).groups_by_type

    def test_mobile_mode_implies_grouping_and_sorting(self) -> None:
        settings = DecklistSettings(mobile_mode=True, enable_advanced_features=False)

        assert settings.groups_by_type
        assert settings.sorts_by_cost

    def test_rejects_unknown_currency(self) -> None:
        with pytest.raises(ValueError):
            DecklistSettings(preferred_currency="gbp")


class TestSettings:
    def test_reads_nested_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DECKSCRIBE_COLLECTION__DIRECTORY", str(tmp_path))
        monkeypatch.setenv("DECKSCRIBE_DECKLIST__PREFERRED_CURRENCY", "eur")

        settings = Settings()

        assert settings.collection.directory == tmp_path
        assert settings.decklist.preferred_currency == "eur"
        assert settings.app_name == "Deckscribe"
