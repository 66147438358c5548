"""The estimator screen: two city fields, a date, quick routes and a result panel."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import httpx

from app.cities.autocomplete import CityAutocomplete
from app.cities.matching import DEFAULT_LIMIT
from app.estimates.form import QUICK_ROUTES, RouteForm, get_quick_route
from app.estimates.models import PredictionState
from app.estimates.service import PredictionRequester
from app.meta.models import MetaState
from app.meta.service import MetadataLoader

logger = logging.getLogger(__name__)


class EstimatorSession:
    """
    Wires the metadata loader, route form, city autocompletes and prediction
    requester together for one mounted view.

    Typing or committing a city writes it into the form; any form edit clears
    the shown prediction. Submitting never waits for metadata.
    """

    def __init__(
        self,
        base_url: Optional[str],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
        today: Optional[date] = None,
        limit: int = DEFAULT_LIMIT,
    ):
        self.base_url = base_url
        self.loader = MetadataLoader(base_url, transport=transport, timeout=timeout)
        self.form = RouteForm(today=today, on_edit=self._invalidate)
        self.requester = PredictionRequester(
            base_url, transport=transport, timeout=timeout, min_date=self.form.min_date
        )
        self.origin = CityAutocomplete(
            self._places,
            on_change=self.form.set_origin,
            on_commit=self.form.set_origin,
            limit=limit,
            text=self.form.origin,
        )
        self.destination = CityAutocomplete(
            self._places,
            on_change=self.form.set_destination,
            on_commit=self.form.set_destination,
            limit=limit,
            text=self.form.destination,
        )

    def _places(self):
        return self.loader.places

    def _invalidate(self) -> None:
        self.requester.reset()

    def _sync_fields(self) -> None:
        self.origin.set_text(self.form.origin)
        self.destination.set_text(self.form.destination)

    # --- lifecycle ---

    async def mount(self) -> MetaState:
        state = await self.loader.mount()
        if self.loader.mounted:
            self.origin.refresh()
            self.destination.refresh()
        return state

    def unmount(self) -> None:
        self.loader.unmount()

    # --- read side ---

    @property
    def meta(self) -> MetaState:
        return self.loader.state

    @property
    def prediction(self) -> PredictionState:
        return self.requester.state

    @property
    def quarter(self) -> Optional[int]:
        return self.form.quarter

    @property
    def can_submit(self) -> bool:
        return self.form.can_submit(self.base_url)

    @property
    def quick_routes(self):
        return QUICK_ROUTES

    # --- actions ---

    def set_date(self, value: str) -> None:
        self.form.set_date(value)

    def swap(self) -> None:
        self.form.swap()
        self._sync_fields()

    async def submit(self) -> PredictionState:
        return await self.requester.submit(self.form.origin, self.form.destination, self.form.travel_date)

    async def pick_quick_route(self, route_id: str) -> PredictionState:
        route = get_quick_route(route_id)
        if route is None:
            logger.warning(f"Unknown quick route {route_id!r}")
            return self.prediction
        self.form.apply_quick_route(route)
        self._sync_fields()
        return await self.submit()
