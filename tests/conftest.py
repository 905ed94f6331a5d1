from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from rave_payments import RaveConfig

TEST_PUBLIC_KEY = "FLWPUBK-e634d14d9ded04eaf05d5b63a0a06d2f-X"
TEST_SECRET_KEY = "FLWSECK-bb971402072265fb156e90a3578fe5e6-X"

_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = _NO_JSON, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = "Bad Request" if status_code >= 400 else "OK"

    def json(self) -> Any:
        if self._payload is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self, *responses: FakeResponse) -> None:
        self.responses: List[FakeResponse] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def _next(self, method: str, url: str, body: Optional[Dict[str, Any]], timeout: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "json": body, "timeout": timeout})
        return self.responses.pop(0)

    def post(self, url: str, json: Optional[Dict[str, Any]] = None, timeout: Any = None) -> FakeResponse:
        return self._next("POST", url, json, timeout)

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        return self._next("GET", url, None, timeout)


@pytest.fixture
def config() -> RaveConfig:
    return RaveConfig(public_key=TEST_PUBLIC_KEY, secret_key=TEST_SECRET_KEY)


@pytest.fixture
def master_card() -> Dict[str, str]:
    return {
        "name": "hello",
        "cardno": "5438898014560229",
        "currency": "NGN",
        "country": "NG",
        "cvv": "789",
        "amount": "300",
        "expiryyear": "19",
        "expirymonth": "09",
        "pin": "3310",
        "email": "tester@flutter.co",
        "IP": "103.238.105.185",
        "txRef": "MXX-ASC-4578",
        "device_fingerprint": "69e6b7f0sb72037aa8428b70fbe03986c",
    }


@pytest.fixture
def payment_page_fields() -> Dict[str, Any]:
    return {
        "PBFPubKey": TEST_PUBLIC_KEY,
        "amount": 20,
        "payment_method": "both",
        "custom_description": "Pay Internet",
        "custom_logo": "http://localhost/payporte-3/skin/frontend/ultimo/shoppy/custom/images/logo.svg",
        "custom_title": "Shoppy Global systems",
        "country": "NG",
        "currency": "NGN",
        "customer_email": "user@example.com",
        "customer_firstname": "Temi",
        "customer_lastname": "Adelewa",
        "customer_phone": "234099940409",
        "txref": "MG-1500041286295",
    }
