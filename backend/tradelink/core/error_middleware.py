from tradelink.core.logger import logger
from tradelink.core.request_middleware import resource_from_path


class ExceptionLoggingMiddleware:
    """
    Logs anything that escapes the domain exception handlers, tagged with the
    resource and id the request was addressing, then re-raises.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        started = False

        async def send_tracking(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except Exception as exc:
            resource, entity_id = resource_from_path(scope.get("path"))
            logger.exception(
                f"Unhandled {type(exc).__name__} on {resource or 'root'}",
                extra={
                    "request_id": scope.get("request_id"),
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "resource": resource,
                    "entity_id": entity_id,
                    "response_started": started,
                },
            )
            raise
