"""Error hierarchy for turris-nightlight.

Every failure that ends a run is a NightlightError; main() logs its message and
exits with status 1.
"""


class NightlightError(Exception):
    """Base class for fatal run errors."""


class ArgumentError(NightlightError):
    """Bad or missing command-line value."""


class LocationError(NightlightError):
    """IP geolocation lookup failed or returned a non-success status."""


class UpstreamError(NightlightError):
    """Sunrise/sunset API unreachable or returned an unexpected payload."""


class CacheError(NightlightError):
    """Cache file could not be read or written."""


class CacheCorruptError(CacheError):
    """Cached record matched the current key but its value line is malformed."""


class InvariantError(NightlightError):
    """Boundary times are out of order (e.g. sunrise before dawn)."""


class CommandError(NightlightError):
    """LED control command could not be run or exited with an error."""
