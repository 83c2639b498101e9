from __future__ import annotations

import pytest
from starlette.requests import Request

from eventhub.middleware.rate_limit import client_key, parse_rate


def _request(headers: dict[str, str] | None = None, client=("203.0.113.7", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/v1/events",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


@pytest.mark.parametrize(
    "rate, expected",
    [
        ("60/minute", (60, 60)),
        ("10/second", (10, 1)),
        (" 120/Hour ", (120, 3600)),
        ("1000/day", (1000, 86400)),
    ],
)
def test_parse_rate(rate, expected):
    assert parse_rate(rate) == expected


@pytest.mark.parametrize("rate", ["60", "60/fortnight", "0/minute", "x/minute"])
def test_parse_rate_rejects_bad_values(rate):
    with pytest.raises(ValueError):
        parse_rate(rate)


def test_client_key_prefers_bearer_token():
    a = client_key(_request({"Authorization": "Bearer dev_a@example.com"}))
    b = client_key(_request({"Authorization": "Bearer dev_a@example.com"}, client=("198.51.100.1", 1)))

    assert a == b
    assert a.startswith("tok:")
    assert "dev_a" not in a


def test_client_key_falls_back_to_ip():
    assert client_key(_request()) == "ip:203.0.113.7"
