"""Dependency injection container."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from toplist.util.di import PROVIDERS, get_provider


def create_container(*providers: Provider) -> AsyncContainer:
    """Build the DI container.

    Settings are loaded from environment variables automatically.

    Args:
        providers: Provider instances to use; production providers when empty

    Returns:
        Configured DI container, including the FastAPI request context
    """
    if not providers:
        providers = tuple(get_provider(base, use_mock=False)() for base in PROVIDERS)
    return make_async_container(*providers, FastapiProvider())


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
