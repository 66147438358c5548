"""Loads the city universe and quarter set from the fare service."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import httpx

from app.core.exceptions import AppException, ConfigMissingException, MetadataLoadFailedException
from app.meta.models import DEFAULT_QUARTERS, MetaState

logger = logging.getLogger(__name__)


def _places_from(data: Any) -> Tuple[str, ...]:
    raw = data.get("cities") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return ()
    # dict.fromkeys: de-duplicate, keep the service's order
    return tuple(dict.fromkeys(c for c in raw if isinstance(c, str)))


def _quarters_from(data: Any) -> Tuple[int, ...]:
    raw = data.get("quarters") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        return DEFAULT_QUARTERS
    return tuple(q for q in raw if isinstance(q, int) and not isinstance(q, bool))


async def fetch_metadata(
    base_url: Optional[str],
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = 10.0,
) -> MetaState:
    """One GET against the fare service; raises AppException subclasses."""
    if not base_url or not base_url.strip():
        raise ConfigMissingException()

    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.get(base_url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise MetadataLoadFailedException(f"Failed to load cities: {e}")

    if not response.is_success:
        raise MetadataLoadFailedException(f"Failed to load cities. HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError:
        raise MetadataLoadFailedException("Failed to load cities: response was not JSON")

    return MetaState(places=_places_from(data), quarters=_quarters_from(data))


class MetadataLoader:
    """
    Owns the MetaState for one mounted view.

    `mount()` issues exactly one load. `unmount()` drops the state; a load that
    finishes afterwards is ignored (the transport itself is not aborted).
    """

    def __init__(
        self,
        base_url: Optional[str],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url
        self._transport = transport
        self._timeout = timeout
        self._token: Optional[object] = None
        self.state = MetaState()

    @property
    def mounted(self) -> bool:
        return self._token is not None

    @property
    def places(self) -> Tuple[str, ...]:
        return self.state.places

    async def mount(self) -> MetaState:
        if self._token is not None:
            return self.state

        token = object()
        self._token = token
        self.state = MetaState(loading=True)
        logger.info("Loading city metadata")

        try:
            result = await fetch_metadata(self.base_url, transport=self._transport, timeout=self._timeout)
            logger.info(f"Loaded {len(result.places)} cities, quarters={list(result.quarters)}")
        except AppException as e:
            logger.warning(f"Metadata load failed: {e.detail}")
            result = MetaState(error=e.detail, error_kind=e.kind)

        if self._token is not token:
            logger.info("Ignoring metadata result for an unmounted view")
            return result

        self.state = result
        return result

    def unmount(self) -> None:
        self._token = None
        self.state = MetaState()
