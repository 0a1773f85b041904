"""
Prometheus metrics middleware for FastAPI.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from satstream.infrastructure.monitoring import metrics


def _endpoint_label(request: Request) -> str:
    """Route template (e.g. /api/admin/withdrawals/{transaction_id}/approve)."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _error_type(status_code: int) -> str | None:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return None


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Count and time every HTTP request.

    Labels use the route template so per-withdrawal URLs share one
    series. Unhandled exceptions are counted under their class name.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        status_code = 500
        error_type = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            error_type = _error_type(status_code)
            return response
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            labels = {"method": request.method, "endpoint": _endpoint_label(request)}
            metrics.http_request_duration_seconds.labels(**labels).observe(
                time.perf_counter() - start_time
            )
            metrics.http_requests_total.labels(**labels, status=status_code).inc()
            if error_type:
                metrics.http_errors_total.labels(**labels, error_type=error_type).inc()
