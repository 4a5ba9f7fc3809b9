# backend/tradelink/core/exceptions.py

"""
Domain errors raised by the service layer.

Services raise these instead of HTTPException; the app maps them to HTTP
responses in ``register_exception_handlers``:

 - NotFoundError      -> 404 (match / negotiation / offer / buyer / listing ... absent)
 - InvalidStateError  -> 400 (negotiation not ACTIVE, offer not PENDING, duplicates)
 - ForbiddenError     -> 403 (ownership or role refusals decided by a service)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradelink.core.logger import logger


class TradeLinkError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TradeLinkError):
    status_code = 404


class InvalidStateError(TradeLinkError):
    status_code = 400


class ForbiddenError(TradeLinkError):
    status_code = 403


async def _tradelink_error_handler(request: Request, exc: TradeLinkError):
    logger.warning(
        exc.message,
        extra={
            "request_id": request.scope.get("request_id"),
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TradeLinkError, _tradelink_error_handler)
