"""
CORS handling for the Video Sync Streaming Server.

Browser preflights for the stream endpoint are answered like a plain OPTIONS
request on it: 204 with the endpoint's declared methods and headers, plus the
origin headers the CORS policy grants.
"""

import re

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from ..video.application.streaming_service import StreamingService

STREAM_PATH = re.compile(r"^/videos/[^/]+/stream/?$")

# Headers of the middleware's own "OK" body
_BODY_HEADERS = frozenset({"content-length", "content-type"})


class StreamAwareCORSMiddleware(CORSMiddleware):
    """CORS middleware whose accepted stream preflights return 204 with ``Allow``"""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS" and STREAM_PATH.match(scope["path"]):
            headers = Headers(scope=scope)
            if "origin" in headers and "access-control-request-method" in headers:
                response = self.stream_preflight_response(headers)
                await response(scope, receive, send)
                return

        await super().__call__(scope, receive, send)

    def stream_preflight_response(self, request_headers: Headers) -> Response:
        response = self.preflight_response(request_headers=request_headers)
        if response.status_code != 200:
            # Disallowed origin, method or header keeps the middleware's 400
            return response

        headers = {name: value for name, value in response.headers.items() if name not in _BODY_HEADERS}
        for name, value in StreamingService.preflight_headers().items():
            headers[name.lower()] = value
        return Response(status_code=204, headers=headers)
