"""Route form model: endpoints, travel date, and the derived quarter.

Dates are ISO `YYYY-MM-DD` strings in the local civil calendar. The quarter
is always derived from the date's month; it is exposed for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional, Union

DEFAULT_ORIGIN = "Dallas/Fort Worth, TX"
DEFAULT_DESTINATION = "New York City, NY (Metropolitan Area)"


def to_iso_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def parse_iso_date(value: Optional[Union[str, date]]) -> Optional[date]:
    """Parse `YYYY-MM-DD`; None for blank or malformed input."""
    if isinstance(value, date):
        return value
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def derive_quarter(value: Union[str, date]) -> int:
    """Calendar quarter (1-4) of the date's month. Raises ValueError on bad dates."""
    d = parse_iso_date(value)
    if d is None:
        raise ValueError(f"Not an ISO date: {value!r}")
    return (d.month - 1) // 3 + 1


def future_iso(days_from_tomorrow: int = 0, today: Optional[date] = None) -> str:
    today = today or date.today()
    return to_iso_date(today + timedelta(days=1 + days_from_tomorrow))


def min_selectable_date(today: Optional[date] = None) -> str:
    """Tomorrow, as an ISO date."""
    return future_iso(0, today)


def can_submit(
    base_url: Optional[str],
    origin: str,
    destination: str,
    travel_date: str,
    min_date: str,
) -> bool:
    if not base_url or not base_url.strip():
        return False
    if not (origin or "").strip() or not (destination or "").strip():
        return False
    picked = parse_iso_date(travel_date)
    if picked is None:
        return False
    return picked >= parse_iso_date(min_date)


@dataclass(frozen=True)
class QuickRoute:
    """A preset route offered as a one-click estimate."""
    id: str
    label: str
    sub: str
    origin: str
    destination: str
    days_from_tomorrow: int

    def travel_date(self, today: Optional[date] = None) -> str:
        return future_iso(self.days_from_tomorrow, today)


QUICK_ROUTES = (
    QuickRoute(
        id="s1",
        label="Dallas → New York",
        sub="Popular business route",
        origin="Dallas/Fort Worth, TX",
        destination="New York City, NY (Metropolitan Area)",
        days_from_tomorrow=2,
    ),
    QuickRoute(
        id="s2",
        label="Chicago → Los Angeles",
        sub="High volume route",
        origin="Chicago, IL",
        destination="Los Angeles, CA (Metropolitan Area)",
        days_from_tomorrow=5,
    ),
    QuickRoute(
        id="s3",
        label="Boston → Washington, DC",
        sub="Short-haul (often cheaper)",
        origin="Boston, MA (Metropolitan Area)",
        destination="Washington, DC (Metropolitan Area)",
        days_from_tomorrow=1,
    ),
    QuickRoute(
        id="s4",
        label="San Francisco → Seattle",
        sub="West coast hop",
        origin="San Francisco, CA (Metropolitan Area)",
        destination="Seattle, WA",
        days_from_tomorrow=3,
    ),
)


def get_quick_route(route_id: str) -> Optional[QuickRoute]:
    return next((r for r in QUICK_ROUTES if r.id == route_id), None)


class RouteForm:
    """
    The two endpoints and the travel date.

    Every edit clears the active quick-route marker and fires `on_edit`, which
    the owner uses to drop any prediction shown for the previous values.
    `min_date` is fixed when the form is built.
    """

    def __init__(
        self,
        origin: str = DEFAULT_ORIGIN,
        destination: str = DEFAULT_DESTINATION,
        travel_date: Optional[str] = None,
        *,
        today: Optional[date] = None,
        on_edit: Optional[Callable[[], None]] = None,
    ):
        self.today = today
        self.min_date = min_selectable_date(today)
        self.origin = origin
        self.destination = destination
        self.travel_date = travel_date if travel_date is not None else self.min_date
        self.active_quick_route: Optional[str] = None
        self._on_edit = on_edit

    def _edited(self) -> None:
        self.active_quick_route = None
        if self._on_edit:
            self._on_edit()

    def set_origin(self, value: str) -> None:
        self.origin = value
        self._edited()

    def set_destination(self, value: str) -> None:
        self.destination = value
        self._edited()

    def set_date(self, value: str) -> None:
        self.travel_date = value
        self._edited()

    def swap(self) -> None:
        self.origin, self.destination = self.destination, self.origin
        self._edited()

    def apply_quick_route(self, route: QuickRoute) -> None:
        self.origin = route.origin
        self.destination = route.destination
        self.travel_date = route.travel_date(self.today)
        self._edited()
        self.active_quick_route = route.id

    @property
    def quarter(self) -> Optional[int]:
        try:
            return derive_quarter(self.travel_date)
        except ValueError:
            return None

    def can_submit(self, base_url: Optional[str]) -> bool:
        return can_submit(base_url, self.origin, self.destination, self.travel_date, self.min_date)
