"""Data model: locations, daily light boundaries, intensity ranges, run context."""

from dataclasses import dataclass
from typing import Optional

from src.config import Settings
from src.errors import CacheCorruptError, InvariantError

TWILIGHT_TYPES = ("civil", "nautical", "astronomical")
LOG_DEVICES = ("stderr", "syslog")


@dataclass(frozen=True)
class Location:
    latitude: float  # WGS84 decimal degrees
    longitude: float  # WGS84 decimal degrees


@dataclass(frozen=True)
class BoundarySet:
    """The four UTC instants (epoch seconds) delimiting one day's light periods."""

    dawn: int
    sunrise: int
    sunset: int
    dusk: int

    @property
    def morning_twilight(self) -> int:
        return self.sunrise - self.dawn

    @property
    def evening_twilight(self) -> int:
        return self.dusk - self.sunset

    def check(self) -> None:
        """Raise InvariantError unless both twilight periods have positive length."""
        if self.morning_twilight <= 0:
            raise InvariantError("sunrise before dawn")
        if self.evening_twilight <= 0:
            raise InvariantError("dusk before sunset")

    def to_csv(self) -> str:
        return f"{self.dawn},{self.sunrise},{self.sunset},{self.dusk}"

    @classmethod
    def from_csv(cls, line: str) -> "BoundarySet":
        """Parse a ``dawn,sunrise,sunset,dusk`` line.

        Exactly three commas are required, and every field must be an integer.
        """
        line = line.strip()
        if line.count(",") != 3:
            raise CacheCorruptError("invalid cache file")
        try:
            dawn, sunrise, sunset, dusk = (int(field) for field in line.split(","))
        except ValueError:
            raise CacheCorruptError("invalid cache file") from None
        return cls(dawn=dawn, sunrise=sunrise, sunset=sunset, dusk=dusk)


@dataclass(frozen=True)
class IntensityRange:
    min: int = 0
    max: int = 100

    @property
    def span(self) -> int:
        return self.max - self.min


@dataclass(frozen=True)
class RunContext:
    """Everything a run needs, fixed once the arguments have been validated.

    ``location`` stays None until coordinates are known; fill it in with
    dataclasses.replace() after the geolocation lookup.
    """

    intensity_range: IntensityRange
    settings: Settings
    twilight: str = "civil"
    location: Optional[Location] = None
    verbose: bool = False
    dry_run: bool = False
    test_mode: bool = False
