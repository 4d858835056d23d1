"""
FastAPI Server for the Video Sync Streaming Server.

This module provides the REST endpoints for video metadata, byte-range
streaming and sessions, plus the WebSocket control channel.
"""

import asyncio
import contextlib
import logging
from typing import Any, Dict, Optional
from datetime import datetime

from fastapi import FastAPI, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from ..core.config import Config
from ..core.errors import InvalidRequest, RangeNotSatisfiable, VideoSyncError
from ..core.logging_config import get_error_tracker
from ..core.timezone_utils import TimezoneManager
from ..sessions.routes import create_session_routes
from ..sessions.store import SessionStore
from ..sync.hub import SyncHub
from ..video.domain.interfaces import VideoCatalog
from ..video.integration import VideoModule
from .cors import StreamAwareCORSMiddleware
from .models import HealthResponse


class APIServer:
    """FastAPI server for the Video Sync Streaming Server"""

    def __init__(self, config: Config, video_module: VideoModule, session_store: SessionStore, sync_hub: SyncHub):
        self.config = config
        self.video_module = video_module
        self.session_store = session_store
        self.sync_hub = sync_hub
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("api_server")

        self.server_start_time = datetime.now()
        self.running = False
        self._server: Optional[uvicorn.Server] = None

        self.app = FastAPI(title="Video Sync Streaming Server API", description="Byte-range video streaming with synchronized playback sessions", version="1.0.0", lifespan=self._lifespan)

        # Stream responses must expose their range headers to browser players
        self.app.add_middleware(
            StreamAwareCORSMiddleware,
            allow_origins=self.config.system.cors_origins,
            allow_credentials=False,
            allow_methods=["GET", "HEAD", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Range", "Content-Type"],
            expose_headers=["Accept-Ranges", "Content-Length", "Content-Range", "Content-Type"],
        )

        self._setup_exception_handlers()
        self._setup_routes()

    @contextlib.asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        reaper = asyncio.create_task(self._reap_sessions())
        try:
            yield
        finally:
            reaper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reaper

    async def _reap_sessions(self) -> None:
        """Expire idle sessions periodically"""
        interval = max(1, self.config.sessions.session_sweep_interval_seconds)
        while True:
            await asyncio.sleep(interval)
            try:
                self.session_store.purge_expired()
            except Exception as e:
                self.logger.error(f"Error purging expired sessions: {e}")

    def _setup_exception_handlers(self):
        @self.app.exception_handler(VideoSyncError)
        async def handle_service_error(request: Request, exc: VideoSyncError):
            headers = {}
            if isinstance(exc, RangeNotSatisfiable):
                headers["Content-Range"] = f"bytes */{exc.file_size}"
            if exc.status_code >= 500:
                self.error_tracker.log_error(exc, f"{request.method} {request.url.path}", exc.details)
            else:
                self.logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

        @self.app.exception_handler(RequestValidationError)
        async def handle_validation_error(request: Request, exc: RequestValidationError):
            # Bodies that are not JSON or do not fit the schema are plain bad requests
            errors = [{"loc": ".".join(str(part) for part in error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]
            return await handle_service_error(request, InvalidRequest("Invalid request body", details={"errors": errors}))

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(
                status="healthy",
                timestamp=datetime.now().isoformat(),
                sessions=self.session_store.count(),
                control_connections=self.sync_hub.connection_count,
            )

        self.app.include_router(self.video_module.get_api_routes())
        self.app.include_router(create_session_routes(self.session_store, self.video_module.video_service))

        @self.app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            """Control channel for play/pause/seek/stop commands"""
            await self.sync_hub.serve(websocket)

    def run(self) -> None:
        """Serve until interrupted (blocking call)"""
        if not self.config.system.enable_api:
            self.logger.info("API server disabled in configuration")
            return

        self.logger.info(f"Starting API server on {self.config.system.api_host}:{self.config.system.api_port}")
        uvicorn_config = uvicorn.Config(self.app, host=self.config.system.api_host, port=self.config.system.api_port, log_level=self.config.system.log_level.lower(), log_config=None)
        self._server = uvicorn.Server(uvicorn_config)
        self.running = True
        try:
            self._server.run()
        finally:
            self.running = False
            self._server = None

    def stop(self) -> None:
        """Ask a running server to shut down"""
        if not self.running or self._server is None:
            return

        self.logger.info("Stopping API server...")
        self._server.should_exit = True

    def is_running(self) -> bool:
        return self.running

    def get_server_info(self) -> Dict[str, Any]:
        return {"running": self.running, "host": self.config.system.api_host, "port": self.config.system.api_port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds(), "websocket_connections": self.sync_hub.connection_count, "errors": self.error_tracker.get_error_stats()}


def create_api_server(config: Config, video_catalog: Optional[VideoCatalog] = None, session_store: Optional[SessionStore] = None) -> APIServer:
    """Build a fully wired server; collaborators can be injected for tests"""
    video_module = VideoModule(config, video_catalog=video_catalog)
    if session_store is None:
        session_store = SessionStore(ttl_seconds=config.sessions.session_ttl_seconds, timezone_manager=TimezoneManager(config.system.timezone))
    sync_hub = SyncHub(session_store, video_module.video_service, send_timeout=config.sessions.control_send_timeout_seconds)
    return APIServer(config, video_module, session_store, sync_hub)


def create_app(config: Config, video_catalog: Optional[VideoCatalog] = None, session_store: Optional[SessionStore] = None) -> FastAPI:
    return create_api_server(config, video_catalog=video_catalog, session_store=session_store).app
