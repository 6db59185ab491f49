"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from charter_funnel.config import (
    AppConfig,
    LookupConfig,
    QuoteConfig,
    WizardConfig,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults():
    config = AppConfig()

    assert config.lookup.min_query_length == 2
    assert config.lookup.providers == ["aviation_edge"]
    assert config.ranking.max_results == 8
    assert config.wizard.variant == "standard"
    assert (config.wizard.min_passengers, config.wizard.max_passengers) == (1, 20)
    assert config.quotes.provider == "synthetic"
    assert config.quotes.price_range_multiplier == 4


def test_packaged_directory_path_exists():
    path = LookupConfig().static_directory_path
    assert isinstance(path, Path)
    assert path.name == "us_airports.csv"
    assert path.exists()


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CHF_WIZARD_VARIANT", "split")
    monkeypatch.setenv("CHF_LOOKUP_PROVIDERS", '["static_us", "aviation_edge"]')
    monkeypatch.setenv("CHF_QUOTE_SEED", "11")
    reset_config()

    config = get_config()

    assert config.wizard.variant == "split"
    assert config.lookup.providers == ["static_us", "aviation_edge"]
    assert config.quotes.seed == 11


def test_invalid_variant_rejected():
    with pytest.raises(ValidationError):
        WizardConfig(variant="express")


def test_invalid_provider_rejected():
    with pytest.raises(ValidationError):
        QuoteConfig(provider="carrier-pigeon")
