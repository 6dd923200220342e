"""
Security headers middleware.
"""

from starlette.middleware.base import BaseHTTPMiddleware

_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


class SecurityHeaders(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        resp = await call_next(request)
        for name, value in _HEADERS.items():
            resp.headers.setdefault(name, value)
        return resp
