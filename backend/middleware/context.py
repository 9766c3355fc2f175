import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from config import logger

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and reports how long it took."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        logger.info(f"[{request_id}] {request.method} {request.url.path} started")
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        duration = time.perf_counter() - start_time
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} "
            f"in {round(duration * 1000, 2)}ms"
        )

        response.headers[self.header_name] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{duration:.3f}s"
        return response


def get_request_id() -> Optional[str]:
    return request_id_var.get()
