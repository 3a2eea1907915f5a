import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware


logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        client_host = request.client.host if request.client else None
        request.state.ip = request.headers.get("x-forwarded-for", client_host)
        request.state.user_agent = request.headers.get("user-agent")
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms) ip=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.ip,
        )
        return response
