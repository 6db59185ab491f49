"""Centralized configuration using Pydantic Settings.

One sub-configuration per concern, each with its own environment
prefix, aggregated in AppConfig:
- CHF_LOOKUP_API_KEY=...
- CHF_LOOKUP_PROVIDERS='["aviation_edge", "static_us"]'
- CHF_WIZARD_VARIANT=extended
- CHF_QUOTE_PROVIDER=http
- CHF_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LookupConfig(BaseSettings):
    """Airport lookup configuration.

    Environment variables prefixed with CHF_LOOKUP_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_LOOKUP_")

    base_url: str = "https://aviation-edge.com/v2/public"
    api_key: str = ""
    code_endpoint: str = "airportDatabase"
    autocomplete_endpoint: str = "autocomplete"
    timeout_seconds: float = 4.0
    min_query_length: int = 2
    code_query_max_length: int = 4
    fallback_params: List[str] = Field(default_factory=lambda: ["city", "q", "search"])
    providers: List[Literal["aviation_edge", "static_us"]] = Field(
        default_factory=lambda: ["aviation_edge"]
    )
    static_directory_path: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data" / "us_airports.csv"
    )
    cache_ttl_seconds: Optional[float] = 300.0
    cache_max_size: Optional[int] = 512


class RankingConfig(BaseSettings):
    """Relevance ranking configuration.

    Environment variables prefixed with CHF_RANKING_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_RANKING_")

    max_results: int = 8


class WizardConfig(BaseSettings):
    """Booking wizard configuration.

    Environment variables prefixed with CHF_WIZARD_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_WIZARD_")

    variant: Literal["standard", "extended", "split"] = "standard"
    min_passengers: int = 1
    max_passengers: int = 20
    default_passengers: int = 1


class SubmissionConfig(BaseSettings):
    """Itinerary submission configuration.

    Environment variables prefixed with CHF_SUBMIT_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_SUBMIT_")

    url: str = "http://localhost:3000/api/submit-itinerary"
    timeout_seconds: float = 10.0


class QuoteConfig(BaseSettings):
    """Quote provider configuration.

    Environment variables prefixed with CHF_QUOTE_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_QUOTE_")

    provider: Literal["synthetic", "http"] = "synthetic"
    url: str = "https://aviapages.com/api/v1/charter_quotes"
    api_key: str = ""
    timeout_seconds: float = 10.0
    currency: str = "USD"
    price_range_multiplier: Optional[int] = 4
    seed: Optional[int] = None


class SuggestionConfig(BaseSettings):
    """Type-ahead suggestion configuration.

    Environment variables prefixed with CHF_SUGGEST_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_SUGGEST_")

    max_workers: int = 4


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with CHF_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # JSON lines, extra fields included


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.lookup.timeout_seconds)
        print(config.wizard.variant)

    Environment variables prefixed with CHF_.
    """

    model_config = SettingsConfigDict(env_prefix="CHF_")

    lookup: LookupConfig = Field(default_factory=LookupConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    wizard: WizardConfig = Field(default_factory=WizardConfig)
    submission: SubmissionConfig = Field(default_factory=SubmissionConfig)
    quotes: QuoteConfig = Field(default_factory=QuoteConfig)
    suggestions: SuggestionConfig = Field(default_factory=SuggestionConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
