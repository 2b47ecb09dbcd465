"""Daily boundary resolver backed by the sunrise-sunset.org API and a daily cache."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

import requests

from src.cache import DailyCache, cache_key
from src.config import Settings
from src.errors import UpstreamError
from src.models import TWILIGHT_TYPES, BoundarySet, Location

ISO8601_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+00:00$")

TIME_FIELDS = (
    "sunrise",
    "sunset",
    "civil_twilight_begin",
    "civil_twilight_end",
    "nautical_twilight_begin",
    "nautical_twilight_end",
    "astronomical_twilight_begin",
    "astronomical_twilight_end",
)


def iso_to_unix(value: str) -> int:
    """Return a ``YYYY-MM-DDThh:mm:ss+00:00`` string as seconds since the epoch.

    The offset is dropped and the remainder is read as UTC.
    """
    naive = value.split("+", 1)[0]
    dt = datetime.strptime(naive, "%Y-%m-%dT%H:%M:%S").replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


@dataclass(frozen=True)
class SunTimesResponse:
    """Decoded sunrise-sunset.org response. All times are ISO 8601 strings in UTC.

    Example body (formatted=0)::

        {
            "results": {
                "sunrise": "2018-05-03T03:27:40+00:00",
                "sunset": "2018-05-03T18:13:04+00:00",
                "solar_noon": "2018-05-03T10:50:22+00:00",
                "day_length": 53124,
                "civil_twilight_begin": "2018-05-03T02:51:28+00:00",
                "civil_twilight_end": "2018-05-03T18:49:16+00:00",
                ...
            },
            "status": "OK"
        }
    """

    sunrise: str
    sunset: str
    civil_twilight_begin: str
    civil_twilight_end: str
    nautical_twilight_begin: str
    nautical_twilight_end: str
    astronomical_twilight_begin: str
    astronomical_twilight_end: str
    solar_noon: Optional[str] = None
    day_length: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "SunTimesResponse":
        """Validate a decoded JSON body and build the response record.

        Raises UpstreamError unless the body is an object with a ``results``
        object, ``status`` equal to ``"OK"`` and all eight time fields present
        as UTC ISO 8601 strings.
        """
        if not isinstance(payload, dict):
            raise UpstreamError(f"times API: invalid response '{payload}'")
        results = payload.get("results")
        status = payload.get("status")
        if not isinstance(results, dict) or status != "OK":
            raise UpstreamError(f"times API: invalid response '{payload}'")

        fields: Dict[str, Any] = {}
        for name in TIME_FIELDS:
            value = results.get(name)
            if not isinstance(value, str) or not ISO8601_UTC.match(value):
                raise UpstreamError(f"times API: invalid or missing '{name}' in response")
            try:
                iso_to_unix(value)
            except ValueError:
                raise UpstreamError(f"times API: invalid or missing '{name}' in response") from None
            fields[name] = value

        solar_noon = results.get("solar_noon")
        day_length = results.get("day_length")
        return cls(
            solar_noon=solar_noon if isinstance(solar_noon, str) else None,
            day_length=day_length if isinstance(day_length, int) else None,
            **fields,
        )

    def boundaries(self, twilight: str) -> BoundarySet:
        """Pick dawn/dusk for the given twilight type and convert all four to epoch seconds."""
        if twilight not in TWILIGHT_TYPES:
            raise ValueError(f"invalid twilight type '{twilight}'")
        return BoundarySet(
            dawn=iso_to_unix(getattr(self, f"{twilight}_twilight_begin")),
            sunrise=iso_to_unix(self.sunrise),
            sunset=iso_to_unix(self.sunset),
            dusk=iso_to_unix(getattr(self, f"{twilight}_twilight_end")),
        )


def fetch_sun_times(location: Location, day: date, settings: Settings) -> SunTimesResponse:
    """Query the times API for ``day`` at ``location``."""
    params = {
        "lat": location.latitude,
        "lng": location.longitude,
        "formatted": 0,
        "date": day.isoformat(),
    }
    try:
        resp = requests.get(settings.times_api_url, params=params, timeout=settings.http_timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise UpstreamError(f"times API: failed to fetch: {e}") from e

    try:
        payload = resp.json()
    except ValueError as e:
        raise UpstreamError(f"times API: invalid response '{resp.text[:400]}'") from e
    return SunTimesResponse.from_payload(payload)


def resolve_boundaries(
    location: Location,
    twilight: str,
    day: date,
    cache: DailyCache,
    settings: Settings,
) -> BoundarySet:
    """Return today's boundaries, from the cache when its key matches, else from the API.

    A fetched result is written back to the cache, replacing the previous record.
    """
    key = cache_key(location, twilight, day)
    cached = cache.get(key)
    if cached is not None:
        logging.debug(f"times API: using cached record for {key}")
        return cached

    logging.info("times API: cache file does not exist/is invalid/is outdated, performing a query")
    boundaries = fetch_sun_times(location, day, settings).boundaries(twilight)
    cache.put(key, boundaries)
    return boundaries
