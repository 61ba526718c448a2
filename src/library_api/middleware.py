import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from library_api.api.responses import internal_error_response
from library_api.context import request_id_var

logger = logging.getLogger("library_api.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        token = request_id_var.set(request_id)
        start = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "unhandled_exception",
                    extra={"method": request.method, "path": str(request.url.path)},
                )
                response = internal_error_response()

            latency_ms = max((time.perf_counter() - start) * 1000, 0.0)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "http_request_complete",
                extra={
                    "method": request.method,
                    "path": str(request.url.path),
                    "status_code": response.status_code,
                    "remote_addr": request.client.host if request.client else None,
                    "latency_ms": round(latency_ms, 3),
                },
            )
            return response
        finally:
            request_id_var.reset(token)
