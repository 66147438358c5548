import asyncio

import httpx
import pytest

from app.estimates.models import PredictionState
from app.estimates.session import EstimatorSession
from tests.conftest import BASE_URL, TODAY


def _session(transport, base_url=BASE_URL):
    return EstimatorSession(base_url, transport=transport, today=TODAY)


@pytest.mark.asyncio
async def test_mount_feeds_both_fields(transport):
    session = _session(transport)
    session.origin.type("chi")
    assert session.origin.visible_candidates == ()

    await session.mount()
    assert session.origin.visible_candidates == ("Chicago, IL",)
    session.destination.focus()
    assert session.destination.visible_candidates == ("New York City, NY (Metropolitan Area)",)


@pytest.mark.asyncio
async def test_pick_cities_and_submit(fare_service, transport):
    session = _session(transport)
    await session.mount()

    session.origin.type("seat")
    session.origin.key("Enter")
    session.destination.type("york")
    session.destination.click(0)
    session.set_date("2027-08-09")

    assert session.form.origin == "Seattle, WA"
    assert session.form.destination == "York, PA"
    assert session.quarter == 3
    assert session.can_submit

    state = await session.submit()
    assert state.result == 412.5
    assert fare_service.post_bodies() == [{"city1": "Seattle, WA", "city2": "York, PA", "quarter": 3}]


@pytest.mark.asyncio
async def test_editing_clears_prediction(transport):
    session = _session(transport)
    await session.submit()
    assert session.prediction.result == 412.5

    session.origin.type("Bos")
    assert session.prediction == PredictionState()


@pytest.mark.asyncio
async def test_submit_does_not_wait_for_metadata(fare_service):
    release = asyncio.Event()

    async def handler(request):
        if request.method == "GET":
            await release.wait()
            return httpx.Response(200, json={"cities": []})
        return httpx.Response(200, json={"prediction": 77.0})

    session = _session(httpx.MockTransport(handler))
    mounting = asyncio.create_task(session.mount())
    await asyncio.sleep(0)
    assert session.meta.loading

    state = await session.submit()
    assert state.result == 77.0

    release.set()
    await mounting
    assert not session.meta.loading


@pytest.mark.asyncio
async def test_metadata_failure_keeps_manual_entry_working(fare_service, transport):
    fare_service.meta_status = 500
    session = _session(transport)
    await session.mount()
    assert session.meta.error == "Failed to load cities. HTTP 500"

    session.origin.type("Boston, MA")
    assert session.origin.visible_candidates == ()
    state = await session.submit()
    assert state.result == 412.5
    assert fare_service.post_bodies()[-1]["city1"] == "Boston, MA"


@pytest.mark.asyncio
async def test_swap(transport):
    session = _session(transport)
    session.swap()
    assert session.form.origin == "New York City, NY (Metropolitan Area)"
    assert session.origin.text == "New York City, NY (Metropolitan Area)"
    assert session.destination.text == "Dallas/Fort Worth, TX"


@pytest.mark.asyncio
async def test_quick_route_submits_immediately(fare_service, transport):
    session = _session(transport)
    state = await session.pick_quick_route("s3")

    assert state.result == 412.5
    assert session.form.active_quick_route == "s3"
    assert session.form.travel_date == "2026-10-21"
    assert session.origin.text == "Boston, MA (Metropolitan Area)"
    assert fare_service.post_bodies() == [
        {"city1": "Boston, MA (Metropolitan Area)", "city2": "Washington, DC (Metropolitan Area)", "quarter": 4}
    ]

    session.set_date("2026-11-01")
    assert session.form.active_quick_route is None


@pytest.mark.asyncio
async def test_unknown_quick_route(fare_service, transport):
    session = _session(transport)
    state = await session.pick_quick_route("s9")
    assert state == PredictionState()
    assert fare_service.requests == []


@pytest.mark.asyncio
async def test_missing_config(fare_service, transport):
    session = _session(transport, base_url=None)
    await session.mount()
    assert session.meta.error_kind == "config_missing"
    assert not session.can_submit
    state = await session.submit()
    assert state.error_kind == "config_missing"
    assert fare_service.requests == []


@pytest.mark.asyncio
async def test_unmount_drops_metadata(transport):
    session = _session(transport)
    await session.mount()
    session.unmount()
    assert session.meta.places == ()
