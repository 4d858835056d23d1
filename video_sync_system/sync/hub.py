"""
WebSocket synchronization hub.

Applies playback commands from control clients to the session store and fans
the resulting session state out to every connected client.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import WebSocket

from ..core.errors import ProtocolViolation
from ..sessions.store import SessionStore
from ..video.application.video_service import VideoService
from .messages import ControlCommand, PauseCommand, PlayCommand, SeekCommand, StatusUpdate, StopCommand, error_notice, parse_command


class SyncHub:
    """
    Broadcast channel for playback state.

    Every status update goes to every connected client, whichever session it
    watches. Command processing and the broadcast it triggers run under one
    lock, so all clients observe updates in the order commands were applied.
    """

    def __init__(self, session_store: SessionStore, video_service: VideoService, send_timeout: float = 5.0):
        self.session_store = session_store
        self.video_service = video_service
        self.send_timeout = send_timeout
        self.active_connections: List[WebSocket] = []
        self.logger = logging.getLogger(__name__)

        self._connections_lock = asyncio.Lock()
        self._command_lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        async with self._connections_lock:
            self.active_connections.append(websocket)
        self.logger.info(f"Control client connected. Total connections: {self.connection_count}")

    async def disconnect(self, websocket: WebSocket):
        async with self._connections_lock:
            if websocket in self.active_connections:
                self.active_connections.remove(websocket)
        self.logger.info(f"Control client disconnected. Total connections: {self.connection_count}")

    async def send_personal_message(self, message: Dict[str, Any], websocket: WebSocket) -> bool:
        try:
            await self._send(websocket, json.dumps(message))
            return True
        except Exception as e:
            self.logger.error(f"Error sending personal message: {e!r}")
            return False

    async def broadcast(self, message: Dict[str, Any]) -> int:
        """
        Send to every connected client, dropping clients whose send fails.

        Sends run concurrently and each is bounded by ``send_timeout``, so a
        client that stopped reading is pruned instead of stalling the others.
        """
        async with self._connections_lock:
            connections = list(self.active_connections)

        if not connections:
            return 0

        payload = json.dumps(message)
        results = await asyncio.gather(*(self._send(connection, payload) for connection in connections), return_exceptions=True)

        delivered = 0
        for connection, result in zip(connections, results):
            if isinstance(result, BaseException):
                self.logger.error(f"Error broadcasting to connection: {result!r}")
                await self.disconnect(connection)
            else:
                delivered += 1

        return delivered

    async def _send(self, websocket: WebSocket, payload: str) -> None:
        await asyncio.wait_for(websocket.send_text(payload), timeout=self.send_timeout)

    async def serve(self, websocket: WebSocket) -> None:
        """Run one client's connection until it disconnects"""
        await self.connect(websocket)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break

                raw = message.get("text")
                if raw is None and message.get("bytes") is not None:
                    raw = message["bytes"].decode("utf-8", errors="replace")
                if raw is None:
                    continue

                await self.handle_message(websocket, raw)
        finally:
            await self.disconnect(websocket)

    async def handle_message(self, websocket: WebSocket, raw: str) -> Optional[StatusUpdate]:
        """Validate one frame; malformed frames get an error notice to the sender only"""
        try:
            command = parse_command(raw)
        except ProtocolViolation as e:
            self.logger.warning(f"Rejected control message: {e.message} {e.details}")
            await self.send_personal_message(error_notice(e), websocket)
            return None

        self.logger.debug(f"Received command: {command!r}")
        return await self.apply_command(command)

    async def apply_command(self, command: ControlCommand) -> Optional[StatusUpdate]:
        """
        Apply a validated command and broadcast the resulting state.

        Commands for unknown sessions are dropped without a reply or broadcast.
        """
        async with self._command_lock:
            status = await self._apply_to_store(command)
            if status is None:
                return None

            await self.broadcast(status.to_wire())
            return status

    async def _apply_to_store(self, command: ControlCommand) -> Optional[StatusUpdate]:
        session = self.session_store.get(command.session_id)
        if session is None:
            self.logger.debug(f"Dropping {command.type} for unknown session {command.session_id}")
            return None

        video = await self.video_service.find_video(session.video_id)
        duration = video.duration_seconds if video else 0
        # A default duration is only a placeholder and does not bound seeks
        seek_limit = video.duration_seconds if video and video.duration_known else None

        if isinstance(command, PlayCommand):
            fields = {"is_playing": True}
        elif isinstance(command, PauseCommand):
            fields = {"is_playing": False}
        elif isinstance(command, SeekCommand):
            fields = {"current_position": self._clamp_position(command.position, seek_limit)}
        elif isinstance(command, StopCommand):
            fields = {"is_playing": False, "current_position": 0.0}
        else:
            raise TypeError(f"Unhandled control command: {type(command).__name__}")

        updated = self.session_store.update(command.session_id, **fields)
        if updated is None:
            # Deleted or expired between lookup and update
            return None

        return StatusUpdate(
            session_id=updated.session_id,
            is_playing=updated.is_playing,
            current_position=updated.current_position,
            duration=duration,
        )

    @staticmethod
    def _clamp_position(position: float, limit: Optional[int]) -> float:
        position = max(0.0, position)
        if limit is not None:
            position = min(position, float(limit))
        return position
