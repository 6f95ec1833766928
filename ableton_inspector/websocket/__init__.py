"""WebSocket server module for inspecting uploaded Live Sets."""

from .server import InspectorWebSocketServer
from .broadcaster import MessageBroadcaster

__all__ = [
    'InspectorWebSocketServer',
    'MessageBroadcaster',
]
