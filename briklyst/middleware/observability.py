from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from briklyst.core.metrics import request_metrics
from briklyst.core.request_context import clear_request_context, set_request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 1500.0


def _route_template(request: Request) -> str:
    # "/storefronts/{username}" rather than one metrics key per username
    path = getattr(request.scope.get("route"), "path", None)
    return path or request.url.path


def _session_user_id(request: Request) -> str | None:
    user_id = getattr(request.state, "user_id", None)
    return None if user_id is None else str(user_id)


def _access_log_level(status_code: int, duration_ms: float) -> int:
    if status_code >= 500:
        return logging.ERROR
    if duration_ms >= SLOW_REQUEST_MS:
        return logging.WARNING
    return logging.INFO


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Request id propagation, one access log line and endpoint metrics per request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        set_request_context(request_id=request_id)

        response = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            status_code = response.status_code if response is not None else 500
            entry = {
                "user_id": _session_user_id(request),
                "endpoint": _route_template(request),
                "method": request.method,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            }
            set_request_context(user_id=entry["user_id"])
            request_metrics.observe(
                endpoint=entry["endpoint"],
                method=entry["method"],
                status_code=status_code,
                duration_ms=entry["duration_ms"],
            )
            logger.log(
                _access_log_level(status_code, entry["duration_ms"]),
                "request completed",
                extra={"request_id": request_id, **entry},
            )
            clear_request_context()
