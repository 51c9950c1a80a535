"""Production dependency injection container."""

from typing import Optional

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from diary.config import Settings
from diary.util.di import PROVIDERS, get_provider


def create_container(settings: Optional[Settings] = None) -> AsyncContainer:
    """Build the container with every production implementation.

    Args:
        settings: Loaded settings; read from the environment when omitted

    Returns:
        Container wired for FastAPI requests
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(
        *providers,
        FastapiProvider(),
        context={Settings: settings or Settings()},
    )
