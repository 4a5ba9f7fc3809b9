import time
import uuid

from tradelink.core.logger import logger


def resource_from_path(path: str):
    # "/negotiations/abc/accept" -> ("negotiations", "abc")
    parts = [p for p in (path or "").split("/") if p]
    return (parts[0] if parts else None), (parts[1] if len(parts) > 1 else None)


class RequestLoggingMiddleware:
    """
    Logs one line per request tagged with the resource and id it addressed,
    and returns the generated id as X-Request-ID.

    4xx/5xx completions are logged at warning level.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = str(uuid.uuid4())
        resource, entity_id = resource_from_path(scope.get("path"))
        scope["request_id"] = request_id
        scope["resource"] = resource
        scope["entity_id"] = entity_id

        context = {
            "request_id": request_id,
            "method": scope.get("method", ""),
            "path": scope.get("path", ""),
            "resource": resource,
            "entity_id": entity_id,
        }
        status = {"code": None}
        start = time.perf_counter()

        async def send_with_request_id(message):
            if message["type"] == "http.response.start":
                status["code"] = message.get("status", 0)
                message["headers"] = list(message.get("headers", [])) + [
                    (b"x-request-id", request_id.encode("utf-8"))
                ]
            await send(message)

        await self.app(scope, receive, send_with_request_id)

        code = status["code"] or 0
        log = logger.warning if code >= 400 else logger.info
        log(
            f"{context['method']} {resource or '/'} -> {code}",
            extra={**context, "status_code": code, "duration_ms": round((time.perf_counter() - start) * 1000, 2)},
        )
