"""IP geolocation lookup (ip-api.com) used when coordinates are not given."""

import logging

import requests

from src.config import Settings
from src.errors import LocationError
from src.models import Location


def lookup_location(settings: Settings) -> Location:
    """Locate this host by its public IP address.

    ip-api.com answers ``fields=status,lat,lon`` with a single CSV line such as
    ``success,50.0755,14.4378``; any other status is reported as the error.
    """
    try:
        resp = requests.get(
            settings.geo_api_url,
            params={"fields": "status,lat,lon"},
            timeout=settings.http_timeout,
        )
        resp.raise_for_status()
    except requests.RequestException as e:
        raise LocationError(f"geo API: failed to fetch: {e}") from e

    body = resp.text.strip()
    if not body:
        raise LocationError("geo API: empty response")

    fields = body.splitlines()[0].split(",")
    status = fields[0]
    if status != "success":
        raise LocationError(f"geo API: {status}")
    if len(fields) < 3:
        raise LocationError(f"geo API: invalid response '{body}'")
    try:
        location = Location(latitude=float(fields[1]), longitude=float(fields[2]))
    except ValueError:
        raise LocationError(f"geo API: invalid response '{body}'") from None

    logging.debug(f"geo API: located at {location.latitude},{location.longitude}")
    return location
