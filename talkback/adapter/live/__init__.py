"""Live update adapter."""

from .channel import LiveUpdateChannel, ReconnectBackoff
from .connector import (
    LiveConnection,
    LiveConnector,
    MockLiveConnection,
    MockLiveConnector,
    WebSocketConnector,
)

__all__ = [
    "LiveConnection",
    "LiveConnector",
    "LiveUpdateChannel",
    "MockLiveConnection",
    "MockLiveConnector",
    "ReconnectBackoff",
    "WebSocketConnector",
]
