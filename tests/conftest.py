import json
from datetime import date
from typing import Any, Callable, List, Optional

import httpx
import pytest


BASE_URL = "https://fares.test/prod/estimate"
TODAY = date(2026, 10, 19)

CITIES = [
    "Dallas/Fort Worth, TX",
    "New York City, NY (Metropolitan Area)",
    "York, PA",
    "Chicago, IL",
    "Los Angeles, CA (Metropolitan Area)",
    "Boston, MA (Metropolitan Area)",
    "Washington, DC (Metropolitan Area)",
    "San Francisco, CA (Metropolitan Area)",
    "Seattle, WA",
    "Newark, NJ",
    "New Orleans, LA",
    "Newburgh/Poughkeepsie, NY",
]


class FakeFareService:
    """Stands in for the remote fare service behind an httpx.MockTransport."""

    def __init__(self):
        self.meta_status = 200
        self.meta_body: Any = {"cities": list(CITIES), "quarters": [1, 2, 3, 4]}
        self.predict_status = 200
        self.predict_body: Any = {"prediction": 412.5}
        self.predict_handler: Optional[Callable] = None
        self.fail_with: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    @property
    def posts(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def gets(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    def post_bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.posts]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if request.method == "GET":
            return _response(self.meta_status, self.meta_body)
        if self.predict_handler is not None:
            return await self.predict_handler(request)
        return _response(self.predict_status, self.predict_body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def _response(status: int, body: Any) -> httpx.Response:
    if isinstance(body, str):
        return httpx.Response(status, text=body)
    return httpx.Response(status, json=body)


@pytest.fixture
def fare_service() -> FakeFareService:
    return FakeFareService()


@pytest.fixture
def transport(fare_service) -> httpx.MockTransport:
    return fare_service.transport()
