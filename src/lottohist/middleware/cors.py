"""CORS middleware — any origin may call the API.

Learn: Every response gets permissive Access-Control-* headers, and every
OPTIONS request is answered directly with an empty 204 so browser
preflights never reach the routers.

Unexpected exceptions are turned into the generic 500 here rather than
in Starlette's ServerErrorMiddleware, which sits outside the middleware
stack and would send the error without CORS headers. A browser could
not read that body cross-origin.
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Allow cross-origin requests from anywhere."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception("http.unhandled_error", path=request.url.path)
            response = JSONResponse(
                status_code=500, content={"error": "Internal server error"}
            )
        response.headers.update(CORS_HEADERS)
        return response
