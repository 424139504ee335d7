"""Security headers middleware.

Learn: Every response gets a fixed set of hardening headers:
- X-Content-Type-Options: no MIME-type sniffing
- X-Frame-Options: never rendered inside a frame
- Referrer-Policy: origin only on cross-origin navigation
- Strict-Transport-Security: HTTPS connections only

Responses under the auth prefix carry bearer tokens in their bodies, so
they are also marked no-store to keep tokens out of browser and proxy
caches.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from authgate.config import settings

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
NO_STORE_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}
HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp security headers onto every response."""

    def __init__(self, app, no_store_prefix: str | None = None):
        super().__init__(app)
        self.no_store_prefix = no_store_prefix or f"{settings.api_prefix}/auth"

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers.update(BASE_HEADERS)
        if request.url.path.startswith(self.no_store_prefix):
            response.headers.update(NO_STORE_HEADERS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = HSTS_VALUE
        return response
