"""
Tests unitaires pour Settings (pydantic-settings).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from hachi.config import Settings
from hachi.services.reconciler import FieldPrecedence


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.artwork_precedence == FieldPrecedence.ENRICHMENT_FIRST
        assert settings.anime_rating_precedence == FieldPrecedence.ENRICHMENT_FIRST
        assert settings.streaming_rating_precedence == FieldPrecedence.PRIMARY_FIRST
        assert settings.episodes_per_season == 100
        assert settings.crawl_delay_range == (2.0, 3.0)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HACHI_ARTWORK_PRECEDENCE", FieldPrecedence.PRIMARY_FIRST.value)
        monkeypatch.setenv("HACHI_EPISODES_PER_SEASON", "50")

        settings = Settings(_env_file=None)

        assert settings.artwork_precedence == FieldPrecedence.PRIMARY_FIRST
        assert settings.episodes_per_season == 50

    def test_paths_are_expanded(self) -> None:
        settings = Settings(_env_file=None, cache_dir="~/hachi-cache")
        assert settings.cache_dir == Path("~/hachi-cache").expanduser()

    def test_crawl_delay_bounds_ordered(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, crawl_delay_min=3.0, crawl_delay_max=2.0)

    def test_episodes_per_season_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, episodes_per_season=0)
