"""
WebSocket server for inspecting uploaded Live Sets.

Clients upload an .als file as a binary frame and get a PROJECT_SUMMARY
message back. When the server also watches a file on disk, each new summary
is broadcast to every connected client.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable, Optional

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from ..constants import ALL_SECTIONS, ExtractionDefaults
from ..errors import InspectorError
from ..inspector import Inspector
from ..models import AbletonProject, SampleOptions
from ..serializers import (
    create_ack_message,
    create_error_message,
    create_summary_message,
)
from .broadcaster import MessageBroadcaster


logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "upload.als"


class InspectorWebSocketServer:
    """
    WebSocket front end for the inspector.

    Each client may send an "options" message to choose the sections and
    sample options applied to its later uploads.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8765,
        sample_options: Optional[SampleOptions] = None,
        sections: Iterable[str] = ExtractionDefaults.DEFAULT_SECTIONS,
    ):
        """
        Initialize the WebSocket server.

        Args:
            host: Host address to bind to
            port: Port to listen on
            sample_options: Default sample options for uploads
            sections: Default sections extracted from uploads
        """
        self.host = host
        self.port = port
        self.broadcaster = MessageBroadcaster()
        self.server: Optional[Any] = None
        self.default_options: Dict[str, Any] = {
            'sample_options': sample_options or SampleOptions(),
            'sections': tuple(sections),
            'file': DEFAULT_UPLOAD_NAME,
        }
        self._client_options: Dict[ServerConnection, Dict[str, Any]] = {}
        self._current_project: Optional[AbletonProject] = None
        self._running = False

    async def start(self) -> None:
        """Start the WebSocket server."""
        if self._running:
            logger.warning("Server is already running")
            return

        self.server = await serve(self._handle_client, self.host, self.port)
        self._running = True
        logger.info(f"WebSocket server started on ws://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the WebSocket server."""
        if not self._running:
            return

        logger.info("Stopping WebSocket server")
        self._running = False
        await self.broadcaster.close_all()

        if self.server:
            self.server.close()
            await self.server.wait_closed()

        logger.info("WebSocket server stopped")

    async def _handle_client(self, websocket: ServerConnection) -> None:
        """
        Handle a client connection.

        Args:
            websocket: WebSocket connection
        """
        await self.broadcaster.register(websocket)
        self._client_options[websocket] = dict(self.default_options)

        try:
            if self._current_project:
                await self.broadcaster.send_to_client(
                    websocket, create_summary_message(self._current_project)
                )

            async for message in websocket:
                await self.handle_message(websocket, message)

        except ConnectionClosed:
            logger.info("Client connection closed")
        finally:
            self._client_options.pop(websocket, None)
            await self.broadcaster.unregister(websocket)

    async def handle_message(self, websocket: ServerConnection, message) -> None:
        """
        Dispatch one client frame.

        Binary frames are .als uploads; text frames are JSON requests.
        """
        if isinstance(message, bytes):
            await self._inspect_upload(websocket, message)
            return

        try:
            request = json.loads(message)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON from client: {e}")
            await self.broadcaster.send_to_client(websocket, create_error_message("Invalid JSON", str(e)))
            return
        if not isinstance(request, dict):
            await self.broadcaster.send_to_client(
                websocket, create_error_message("Invalid request", "Expected a JSON object")
            )
            return

        logger.debug(f"Received message from client: {request.get('type')}")
        if request.get('type') == 'options':
            try:
                self._client_options[websocket] = self._parse_options(request)
            except ValueError as e:
                await self.broadcaster.send_to_client(websocket, create_error_message("Invalid options", str(e)))
                return

        await self.broadcaster.send_to_client(websocket, create_ack_message(request.get('request_id')))

    async def _inspect_upload(self, websocket: ServerConnection, data: bytes) -> None:
        options = self._client_options.get(websocket, self.default_options)
        try:
            project = await asyncio.to_thread(
                inspect_bytes, data, options['sample_options'], options['sections'], options['file']
            )
        except InspectorError as e:
            logger.warning(f"Rejected upload: {e}")
            await self.broadcaster.send_to_client(websocket, create_error_message("Invalid project file", str(e)))
            return

        await self.broadcaster.send_to_client(websocket, create_summary_message(project))

    def _parse_options(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Build per-client options from an "options" request."""
        sections = request.get('sections')
        if sections is not None and not _is_string_list(sections):
            raise ValueError("sections must be a list of strings")
        sections = tuple(sections or self.default_options['sections'])
        unknown = set(sections).difference(ALL_SECTIONS)
        if unknown:
            raise ValueError(f"Unknown sections: {', '.join(sorted(unknown))}")

        splice_paths = request.get('splicePaths')
        if splice_paths is not None and not _is_string_list(splice_paths):
            raise ValueError("splicePaths must be a list of strings")

        return {
            'sample_options': SampleOptions(
                splice_paths=[p for p in splice_paths or [] if p] or None,
                splice_only=bool(request.get('spliceOnly', False)),
            ),
            'sections': sections,
            'file': str(request.get('file') or DEFAULT_UPLOAD_NAME),
        }

    async def broadcast_project(self, project: AbletonProject) -> None:
        """
        Broadcast a project summary to all clients and keep it for new ones.

        Args:
            project: Latest extraction result
        """
        self._current_project = project
        await self.broadcaster.broadcast(create_summary_message(project))
        logger.info(f"Broadcasted summary of {project.file} to all clients")

    async def broadcast_error(self, error: str, details: Optional[str] = None) -> None:
        await self.broadcaster.broadcast(create_error_message(error, details))
        logger.warning(f"Broadcasted error: {error}")

    def get_client_count(self) -> int:
        return self.broadcaster.get_client_count()

    def is_running(self) -> bool:
        return self._running


def inspect_bytes(
    data: bytes,
    sample_options: Optional[SampleOptions],
    sections: Iterable[str],
    file: str,
) -> AbletonProject:
    """Decompress, parse and extract an uploaded Live Set."""
    inspector = Inspector.from_bytes(data)
    return inspector.extract_all(sample_options=sample_options, sections=sections, file=file)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
