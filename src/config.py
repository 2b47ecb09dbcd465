"""Runtime settings read from the environment (or a .env file loaded by the CLI)."""

import os
import shlex
from dataclasses import dataclass
from typing import List, Mapping, Optional

from src.errors import ArgumentError

DEFAULT_CACHE_FILE = "/tmp/turris-nightlight"
DEFAULT_TIMES_API_URL = "https://api.sunrise-sunset.org/json"
DEFAULT_GEO_API_URL = "http://ip-api.com/csv"
DEFAULT_LED_COMMAND = "rainbow intensity"
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    cache_file: str = DEFAULT_CACHE_FILE
    times_api_url: str = DEFAULT_TIMES_API_URL
    geo_api_url: str = DEFAULT_GEO_API_URL
    led_command: str = DEFAULT_LED_COMMAND
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def led_argv(self, intensity: int) -> List[str]:
        """Return the LED command as an argv list with the intensity appended."""
        return shlex.split(self.led_command) + [str(intensity)]


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from NIGHTLIGHT_* variables, falling back to the defaults."""
    env = os.environ if env is None else env
    raw_timeout = env.get("NIGHTLIGHT_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ArgumentError(f"invalid NIGHTLIGHT_HTTP_TIMEOUT '{raw_timeout}'") from None
    if timeout <= 0:
        raise ArgumentError(f"invalid NIGHTLIGHT_HTTP_TIMEOUT '{raw_timeout}'")

    return Settings(
        cache_file=env.get("NIGHTLIGHT_CACHE_FILE") or DEFAULT_CACHE_FILE,
        times_api_url=env.get("NIGHTLIGHT_TIMES_API_URL") or DEFAULT_TIMES_API_URL,
        geo_api_url=env.get("NIGHTLIGHT_GEO_API_URL") or DEFAULT_GEO_API_URL,
        led_command=env.get("NIGHTLIGHT_LED_COMMAND") or DEFAULT_LED_COMMAND,
        http_timeout=timeout,
    )
