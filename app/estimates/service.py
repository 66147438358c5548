"""Fare estimate service: submission validation and the prediction call."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

import httpx

from app.core.exceptions import (
    AppException,
    ConfigMissingException,
    RequestFailedException,
    ValidationFailedException,
)
from app.estimates.form import derive_quarter, min_selectable_date, parse_iso_date
from app.estimates.models import PredictionPayload, PredictionState

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response from API."


class EstimateService:
    """Stateless pieces of a fare estimate."""

    @staticmethod
    def validate(
        base_url: Optional[str],
        origin: str,
        destination: str,
        travel_date: str,
        *,
        min_date: Optional[str] = None,
        today: Optional[date] = None,
    ) -> PredictionPayload:
        """
        Check a submission and build the outbound payload.

        Order matters, first failure wins: configuration, origin, destination,
        distinct endpoints, date present, date not before `min_date`.
        """
        if not base_url or not base_url.strip():
            raise ConfigMissingException()

        origin = origin or ""
        destination = destination or ""
        if not origin.strip():
            raise ValidationFailedException(
                ValidationFailedException.BOTH_ENDPOINTS_REQUIRED, "Please select a departure city."
            )
        if not destination.strip():
            raise ValidationFailedException(
                ValidationFailedException.BOTH_ENDPOINTS_REQUIRED, "Please select a destination city."
            )
        if origin == destination:
            raise ValidationFailedException(
                ValidationFailedException.SAME_ENDPOINT, "From and To cannot be the same city."
            )

        picked = parse_iso_date(travel_date)
        if picked is None:
            raise ValidationFailedException(
                ValidationFailedException.DATE_REQUIRED, "Please pick a travel date."
            )
        earliest = parse_iso_date(min_date or min_selectable_date(today))
        if picked < earliest:
            raise ValidationFailedException(
                ValidationFailedException.DATE_NOT_FUTURE, "Please pick a future date (tomorrow onwards)."
            )

        return PredictionPayload(city1=origin, city2=destination, quarter=derive_quarter(picked))

    @staticmethod
    async def fetch_prediction(
        base_url: str,
        payload: PredictionPayload,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> float:
        """POST the payload and return the numeric prediction."""
        try:
            async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
                response = await client.post(base_url, json=payload.model_dump())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            reason = str(e) or e.__class__.__name__
            logger.error(f"Fare service unreachable: {reason}")
            raise RequestFailedException(f"Could not reach the fare service: {reason}")

        if not response.is_success:
            body = response.text
            logger.error(f"Fare service returned HTTP {response.status_code}")
            raise RequestFailedException(
                f"API error {response.status_code}: {body}",
                upstream_status=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError:
            raise RequestFailedException(UNEXPECTED_RESPONSE, upstream_status=response.status_code)

        prediction = data.get("prediction") if isinstance(data, dict) else None
        if (
            isinstance(prediction, bool)
            or not isinstance(prediction, (int, float))
            or (isinstance(prediction, float) and not math.isfinite(prediction))
        ):
            raise RequestFailedException(UNEXPECTED_RESPONSE, upstream_status=response.status_code)

        return float(prediction)


class PredictionRequester:
    """
    Holds the PredictionState of one estimate panel.

    Each submit (and each reset) takes the next sequence number; a response is
    applied only if its number is still the latest, so the last submit wins
    whatever order responses arrive in.
    """

    def __init__(
        self,
        base_url: Optional[str],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
        min_date: Optional[str] = None,
        today: Optional[date] = None,
    ):
        self.base_url = base_url
        self._transport = transport
        self._timeout = timeout
        self.min_date = min_date or min_selectable_date(today)
        self._sequence = 0
        self.state = PredictionState()

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def reset(self) -> None:
        """Clear result/error and orphan any request still in flight."""
        self._next_sequence()
        self.state = PredictionState()

    async def submit(self, origin: str, destination: str, travel_date: str) -> PredictionState:
        seq = self._next_sequence()
        self.state = PredictionState(loading=True)

        try:
            payload = EstimateService.validate(
                self.base_url, origin, destination, travel_date, min_date=self.min_date
            )
            logger.info(f"Requesting estimate #{seq}: {payload.city1} -> {payload.city2}, Q{payload.quarter}")
            prediction = await EstimateService.fetch_prediction(
                self.base_url, payload, transport=self._transport, timeout=self._timeout
            )
            outcome = PredictionState(result=prediction, quarter=payload.quarter)
        except AppException as e:
            outcome = PredictionState(
                error=e.detail,
                error_kind=e.kind,
                error_reason=getattr(e, "reason", None),
            )

        if seq != self._sequence:
            logger.info(f"Discarding estimate #{seq}; #{self._sequence} superseded it")
            return outcome

        self.state = outcome
        return outcome
