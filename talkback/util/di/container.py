"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from talkback.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Each
    comment session runs in its own request scope:

        container = create_container()
        async with container() as request_container:
            session = await request_container.get(CommentSession)

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
