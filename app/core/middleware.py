import logging
import uuid
from typing import Iterable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

ORIGIN_REJECTED_MESSAGE = "CORS not allowed for this origin"


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose Origin header is not in the allowed set.

    Requests without an Origin header (same-origin navigation, curl,
    server-to-server) are let through. Rejected requests never reach
    routing, so no upload is parsed or stored.
    """

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin not in self.allowed_origins:
            logger.warning(
                "ORIGIN_REJECTED | origin=%s | method=%s | path=%s",
                origin,
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"message": ORIGIN_REJECTED_MESSAGE},
            )
        return await call_next(request)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add X-Request-ID header for tracing.

    If the client sends X-Request-ID, it is preserved.
    Otherwise, a new UUID is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id

        logger.info(
            f"REQUEST | id={request_id} | method={request.method} | path={request.url.path}"
        )

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
