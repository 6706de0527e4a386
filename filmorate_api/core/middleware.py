import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from filmorate_api.core.trace import TRACE_HEADER, set_trace_id

alog = logging.getLogger("access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Per-request trace id and one JSON access record per request."""

    async def dispatch(self, request: Request, call_next):
        # входящий X-Request-Id пробрасываем, иначе генерируем свой
        trace_id = set_trace_id(request.headers.get(TRACE_HEADER))
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            alog.info(
                "access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query)
                    if request.url.query else "",
                    "status": status,
                    "latency_ms": dur_ms,
                    "client_ip": request.client.host
                    if request.client else None,
                },
            )
