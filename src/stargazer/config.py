"""Runtime settings read from the environment.

Entry points call ``load_dotenv()`` first, so a ``.env`` file in the working
directory works the same as exported variables.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    default_latitude: float = 38.75  # Used when a query has no location at all
    default_longitude: float = -77.48
    fallback_latitude: float = 39.8283  # Used when a location cannot be resolved
    fallback_longitude: float = -98.5795
    moon_light_color: str = "#FFFDE7"
    cache_ttl_seconds: float = 1800
    historical_cache_ttl_seconds: float = 604800
    cache_maxsize: int = 512
    geocode_enabled: bool = True
    geocode_timeout: float = 10
    log_level: str = "INFO"


def _flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def load_settings() -> Settings:
    """Build Settings from STARGAZER_* environment variables."""
    env = os.environ
    defaults = Settings()
    return Settings(
        default_latitude=float(env.get("STARGAZER_DEFAULT_LAT", defaults.default_latitude)),
        default_longitude=float(env.get("STARGAZER_DEFAULT_LNG", defaults.default_longitude)),
        fallback_latitude=float(env.get("STARGAZER_FALLBACK_LAT", defaults.fallback_latitude)),
        fallback_longitude=float(env.get("STARGAZER_FALLBACK_LNG", defaults.fallback_longitude)),
        moon_light_color=env.get("STARGAZER_MOON_COLOR", defaults.moon_light_color),
        cache_ttl_seconds=float(env.get("STARGAZER_CACHE_TTL", defaults.cache_ttl_seconds)),
        historical_cache_ttl_seconds=float(
            env.get("STARGAZER_HISTORICAL_CACHE_TTL", defaults.historical_cache_ttl_seconds)
        ),
        cache_maxsize=int(env.get("STARGAZER_CACHE_MAXSIZE", defaults.cache_maxsize)),
        geocode_enabled=_flag(env.get("STARGAZER_GEOCODE", "1")),
        geocode_timeout=float(env.get("STARGAZER_GEOCODE_TIMEOUT", defaults.geocode_timeout)),
        log_level=env.get("STARGAZER_LOG_LEVEL", defaults.log_level).upper(),
    )
