# chatrelay/middleware/request_logger.py
import logging
import time
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("chatrelay.http")


class RequestLoggerMiddleware:
    """
    Logs every HTTP request with:
      - method, path, query, status, duration
      - the `User` header (caller identity)
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        start = time.time()
        user = request.headers.get("user", "-")
        path = request.url.path
        query = request.url.query
        status = {"code": 500}

        logger.info("[HTTP >] user=%s %s %s%s", user, request.method, path, f"?{query}" if query else "")

        async def send_wrapper(message: Message):
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            dur_ms = (time.time() - start) * 1000
            logger.info("[HTTP <] user=%s %s %s status=%d done in %.1fms",
                        user, request.method, path, status["code"], dur_ms)
