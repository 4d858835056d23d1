"""
API module for the Video Sync Streaming Server.

This module provides REST endpoints and the WebSocket control channel.
"""

from .server import APIServer, create_api_server, create_app

__all__ = ["APIServer", "create_api_server", "create_app"]
