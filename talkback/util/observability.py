"""Observability configuration using Logfire.

Services, use cases and adapters log through logfire directly:

    import logfire

    logfire.info("Comment reconciled", comment_id=str(comment.id))

    with logfire.span("load_comments", host=host, path=path):
        ...
"""

import sys

import logfire

from talkback.config import Settings
from talkback.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Telemetry is sent to Logfire cloud when explicitly enabled, or when a
    token is configured and sending isn't explicitly disabled. Otherwise
    events only go to the console.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If sending is enabled without a token
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    if send_to_logfire and not settings.observability.logfire_token:
        raise ConfigurationError(
            "OBSERVABILITY__LOGFIRE_TOKEN must be set to send telemetry to Logfire"
        )

    config_kwargs = {
        "service_name": "talkback-embed",
        "service_version": "1.0.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
            # stdout carries the rendered comment tree
            output=sys.stderr,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_httpx() -> None:
    """Instrument httpx with Logfire.

    Traces every backend API request, its duration and errors.
    """
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
