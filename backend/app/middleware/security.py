from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from devconnector.config import get_settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to every API response.

    The API only serves JSON, so the content policy denies everything.
    HSTS is only sent when ENV is production.
    """

    def __init__(self, app):
        super().__init__(app)
        self.is_production = get_settings().is_production

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        if self.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
