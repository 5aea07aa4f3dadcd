"""Application configuration."""

from typing import Literal
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseModel):
    """Comment backend API configuration."""

    # Base URL of the backend API, including the /api prefix
    base_url: str = "http://localhost:8080/api"

    # Timeout for a single HTTP request, in seconds
    timeout: float = 30.0


class LiveUpdateSettings(BaseModel):
    """Live update (WebSocket) configuration."""

    # Whether to subscribe to live comment updates at all
    enabled: bool = True

    # Path of the WebSocket endpoint, relative to the API base URL
    path: str = "ws/comments"

    # Reconnect backoff: starts at the baseline and doubles on every attempt,
    # capped at the maximum
    reconnect_delay_ms: int = 1000
    reconnect_delay_max_ms: int = 60_000

    # Set by Settings validator from api.base_url
    ws_url: str = "ws://localhost:8080/api/ws/comments"


class EmbedSettings(BaseModel):
    """Settings of the embedded comment widget."""

    # Host the comments are embedded on (e.g., "blog.example.com")
    host: str = "localhost"

    # Path of the page to load comments for
    page_path: str = "/"

    # Whether to hide deleted comments that have no replies
    hide_deleted: bool = False

    # Nesting level beyond which replies stop being indented
    max_level: int = 10

    # Whether voting controls are shown
    enable_voting: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Values are read from the environment (and a .env file), nested sections
    using the ``__`` delimiter:

        API__BASE_URL=https://comments.example.com/api
        EMBED__HOST=blog.example.com
        EMBED__PAGE_PATH=/posts/hello-world
        LIVE__RECONNECT_DELAY_MAX_MS=30000

    The WebSocket URL is computed from the API base URL, replacing the scheme
    with ws:// or wss://.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows API__BASE_URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    api: APISettings = APISettings()
    live: LiveUpdateSettings = LiveUpdateSettings()
    embed: EmbedSettings = EmbedSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_live_settings(self) -> "Settings":
        """Derive the WebSocket endpoint URL from the API base URL."""
        self.live.ws_url = websocket_url(self.api.base_url, self.live.path)
        return self

    @computed_field
    @property
    def is_secure(self) -> bool:
        """Whether the API is served over TLS."""
        return urlsplit(self.api.base_url).scheme == "https"


def websocket_url(base_url: str, path: str) -> str:
    """Build a WebSocket URL from an HTTP base URL and a relative path.

    Args:
        base_url: HTTP(S) base URL, e.g. "https://example.com/api"
        path: Path relative to the base URL, e.g. "ws/comments"

    Returns:
        URL with ws:// or wss:// scheme, e.g. "wss://example.com/api/ws/comments"
    """
    parts = urlsplit(base_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    joined = parts.path.rstrip("/") + "/" + path.lstrip("/")
    return urlunsplit((scheme, parts.netloc, joined, "", ""))
