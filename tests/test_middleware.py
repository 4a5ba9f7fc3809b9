import logging

import pytest

from conftest import auth
from tradelink.core.error_middleware import ExceptionLoggingMiddleware
from tradelink.core.request_middleware import resource_from_path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/negotiations/neg-1/accept", ("negotiations", "neg-1")),
        ("/matches", ("matches", None)),
        ("/", (None, None)),
    ],
)
def test_resource_from_path(path, expected):
    assert resource_from_path(path) == expected


async def test_request_log_is_tagged_with_resource(client, marketplace, caplog):
    with caplog.at_level(logging.INFO, logger="tradelink"):
        resp = await client.get(f"/listings/{marketplace.listing.id}", headers=auth(marketplace.buyer_user))

    assert resp.status_code == 200
    record = [r for r in caplog.records if getattr(r, "resource", None) == "listings"][-1]
    assert record.entity_id == marketplace.listing.id
    assert record.status_code == 200
    assert record.request_id == resp.headers["x-request-id"]


async def test_not_found_is_logged_as_warning(client, marketplace, caplog):
    with caplog.at_level(logging.INFO, logger="tradelink"):
        resp = await client.get("/matches/missing", headers=auth(marketplace.buyer_user))

    assert resp.status_code == 404
    completed = [r for r in caplog.records if getattr(r, "status_code", None) == 404 and getattr(r, "resource", None) == "matches"]
    assert completed and all(r.levelno == logging.WARNING for r in completed)


async def test_unhandled_error_is_logged_and_reraised(caplog):
    async def broken_app(scope, receive, send):
        raise RuntimeError("boom")

    middleware = ExceptionLoggingMiddleware(broken_app)
    scope = {"type": "http", "method": "POST", "path": "/payments/pay-1/verify", "request_id": "req-1"}

    with caplog.at_level(logging.ERROR, logger="tradelink"):
        with pytest.raises(RuntimeError):
            await middleware(scope, None, None)

    record = caplog.records[-1]
    assert record.resource == "payments"
    assert record.entity_id == "pay-1"
    assert record.response_started is False
