"""Dependency injection container.

Wires the funnel together: lookup directories, the resolution cache,
ranking and search, the type-ahead executor, the submission and quote
collaborators, and per-session booking wizards.

- Explicit registration: every binding is a factory keyed by type
- Lazy: adapters are built on first resolve
- Thread-safe: resolution happens under a re-entrant lock
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .config import AppConfig, get_config
from .logging_setup import configure_logging


@dataclass
class Container:
    """Type-keyed registry of factories.

    Usage:
        # Production
        container = Container.create_default()
        wizard = container.resolve(BookingWizard)

        # Testing
        container = Container()
        container.register(SubmissionPort, lambda: FakeSubmission())
        submission = container.resolve(SubmissionPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind a factory to a type.

        Args:
            port_type: Port protocol or service class used as the key.
            factory: Zero-argument callable building the instance.
            singleton: Build once and reuse (default) or build per resolve.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build or fetch the instance bound to a type.

        Raises:
            KeyError: If nothing is registered for the type.
        """
        with self._lock:
            factory = self._factories.get(port_type)
            if factory is None:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type not in self._singleton_types:
                return factory()
            if port_type not in self._singletons:
                self._singletons[port_type] = factory()
            return self._singletons[port_type]

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def shutdown(self, wait: bool = False) -> None:
        """Stop the lookup executor, if one was built.

        Args:
            wait: Block until in-flight lookups have delivered.
        """
        with self._lock:
            executor = self._singletons.get(Executor)
        if executor is not None:
            executor.shutdown(wait=wait)

    def clear_singletons(self) -> None:
        """Drop built instances; the next resolve builds fresh ones."""
        self.shutdown()
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Drop every registration and built instance."""
        self.shutdown()
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Lookup directories follow config.lookup.providers in order; the
        quote provider follows config.quotes.provider. BookingWizard is
        registered per-session (not a singleton).

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryResultCache
        from .adapters.lookup import AviationEdgeDirectoryAdapter, StaticAirportDirectory
        from .adapters.quotes import HttpQuoteProvider, SyntheticQuoteProvider
        from .adapters.submission import HttpSubmissionAdapter
        from .domain.models import CanonicalAirport
        from .domain.steps import FlowVariant, StepGraph, build_step_graph
        from .ports.airport_directory import AirportDirectoryPort
        from .ports.cache import ResultCachePort
        from .ports.quotes import QuoteProviderPort
        from .ports.submission import SubmissionPort
        from .services import (
            AirportResolutionService,
            AirportSearchService,
            BookingWizard,
            LocationSuggester,
            RelevanceRanker,
        )

        config = config or get_config()
        container = cls(config=config)

        # Cache of resolved airports, shared by every session
        cache: InMemoryResultCache[Tuple[CanonicalAirport, ...]] = InMemoryResultCache(
            name="airports",
            default_ttl_seconds=config.lookup.cache_ttl_seconds,
            max_size=config.lookup.cache_max_size,
        )
        container.register(ResultCachePort, lambda: cache)

        # Lookup
        def create_directory(name: str) -> AirportDirectoryPort:
            if name == "static_us":
                return StaticAirportDirectory(config.lookup)
            return AviationEdgeDirectoryAdapter(config.lookup)

        container.register(
            AirportResolutionService,
            lambda: AirportResolutionService(
                directories=[create_directory(name) for name in config.lookup.providers],
                config=config.lookup,
                cache=container.resolve(ResultCachePort),
            ),
        )
        container.register(RelevanceRanker, lambda: RelevanceRanker(config.ranking))
        container.register(
            AirportSearchService,
            lambda: AirportSearchService(
                resolver=container.resolve(AirportResolutionService),
                ranker=container.resolve(RelevanceRanker),
            ),
        )

        # Type-ahead lookups run off the caller's thread
        container.register(
            Executor,
            lambda: ThreadPoolExecutor(
                max_workers=config.suggestions.max_workers,
                thread_name_prefix="airport-lookup",
            ),
        )

        # Collaborators
        def create_quote_provider() -> QuoteProviderPort:
            if config.quotes.provider == "http":
                return HttpQuoteProvider(
                    config.quotes, search=container.resolve(AirportSearchService)
                )
            return SyntheticQuoteProvider(config.quotes)

        container.register(QuoteProviderPort, create_quote_provider)
        container.register(SubmissionPort, lambda: HttpSubmissionAdapter(config.submission))

        # Wizard
        container.register(
            StepGraph,
            lambda: build_step_graph(FlowVariant.named(config.wizard.variant)),
        )

        def create_suggester(field_name: str) -> LocationSuggester:
            return LocationSuggester(
                suggest=container.resolve(AirportSearchService).suggest,
                executor=container.resolve(Executor),
                min_query_length=config.lookup.min_query_length,
                field_name=field_name,
            )

        def create_wizard() -> BookingWizard:
            return BookingWizard(
                graph=container.resolve(StepGraph),
                quote_provider=container.resolve(QuoteProviderPort),
                submission=container.resolve(SubmissionPort),
                config=config.wizard,
                origin_suggester=create_suggester("from"),
                destination_suggester=create_suggester("to"),
            )

        container.register(BookingWizard, create_wizard, singleton=False)

        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Process-wide container, built on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                config = get_config()
                configure_logging(config.observability)
                _default_container = Container.create_default(config)
    return _default_container


def reset_container() -> None:
    """Discard the process-wide container (used by tests)."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
