import json
import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


class CORSGateMiddleware:
    """Reject browser requests whose Origin is not on the allow-list.

    Requests without an Origin header (server-to-server, curl) pass through.
    CORSMiddleware still emits the response headers for allowed origins.
    """

    def __init__(self, app, allow_origins: Iterable[str]):
        self.app = app
        self.allow_origins = set(allow_origins)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = None
        for name, value in scope.get("headers", []):
            if name == b"origin":
                origin = value.decode("latin-1")
                break

        if origin is None or "*" in self.allow_origins or origin in self.allow_origins:
            await self.app(scope, receive, send)
            return

        logger.warning(f"Blocked request from origin {origin} to {scope.get('path')}")
        body = json.dumps({"detail": "Origin not allowed by CORS"}).encode()
        await send({
            "type": "http.response.start",
            "status": 403,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        })
        await send({"type": "http.response.body", "body": body})
