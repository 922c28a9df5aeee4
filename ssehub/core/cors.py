from __future__ import annotations
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from ssehub.core.config import settings


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Adds the allow-origin/methods/headers trio to every response.
    - Reads the header values from settings on each request.
    - Answers OPTIONS preflights with 204 before routing.
    """

    def _cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
            "Access-Control-Allow-Methods": ", ".join(settings.CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(settings.CORS_ALLOW_HEADERS),
        }

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=self._cors_headers())
        response = await call_next(request)
        response.headers.update(self._cors_headers())
        return response
