"""Request layer — query validation, location resolution, and response assembly."""

import logging
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from typing import Any

import httpx
import pytz
from pytz import timezone, utc
from timezonefinder import TimezoneFinder

from stargazer.cache import TTLCache, response_cache_key
from stargazer.config import Settings, load_settings
from stargazer.constellations import visible_constellations
from stargazer.models import ObserverLocation, StarMapQuery, StarMapResponse
from stargazer.moon import moon_phase, next_moon_events
from stargazer.planets import visible_planets
from stargazer.renderers.moon_svg import LIGHT, render_moon_phase_svg
from stargazer.renderers.starmap_svg import render_star_map_svg

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()

_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_USER_AGENT = "Stargazer/1.0 (night sky star map)"

_COORDS_RE = re.compile(r"^(-?\d+(?:\.\d+)?),\s*(-?\d+(?:\.\d+)?)$")
_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_UNSAFE_CHARS_RE = re.compile(r"[<>\\/\"']")
_MAX_TEXT_LEN = 100
_HISTORICAL_AFTER = timedelta(days=30)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Resolved without a network round trip. Matched by substring, in this order.
KNOWN_LOCATIONS: dict[str, tuple[float, float]] = {
    "new york": (40.7128, -74.0060),
    "london": (51.5074, -0.1278),
    "tokyo": (35.6762, 139.6503),
    "sydney": (-33.8688, 151.2093),
    "paris": (48.8566, 2.3522),
    "chitwan": (27.5291, 84.3542),
    "nepal": (28.3949, 84.1240),
}


class QueryError(ValueError):
    """Request rejected before reaching the astronomy core."""


class GeocodingError(Exception):
    """Geocoder call failure."""


def sanitize_text(value: Any) -> str:
    """Trim, drop markup-sensitive characters, and cap length."""
    return _UNSAFE_CHARS_RE.sub("", str(value).strip())[:_MAX_TEXT_LEN]


def _geocode_nominatim(address: str, timeout: float = 10) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": _USER_AGENT}
    try:
        resp = httpx.get(_NOMINATIM_URL, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
        results = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise GeocodingError(f"nominatim lookup failed: {e}") from e
    if not results:
        return None
    r = results[0]
    try:
        return float(r["lat"]), float(r["lon"]), r.get("display_name", address)
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError(f"malformed nominatim result: {r!r}") from e


def resolve_location(text: str, settings: Settings | None = None) -> ObserverLocation:
    """Turn free text into coordinates.

    Tries, in order: a literal "lat, lng" pair, the known-city table, the
    Nominatim geocoder (when enabled), and finally the configured fallback
    point. Never raises for an unknown place.

    Args:
        text: Sanitized location text ("Paris", "40.7, -74.0", ...).
        settings: Runtime settings; loaded from the environment if None.

    Returns:
        ObserverLocation whose label is the input text or the geocoder's
        display name.
    """
    settings = settings or load_settings()

    match = _COORDS_RE.match(text.strip())
    if match:
        return ObserverLocation(float(match.group(1)), float(match.group(2)), label=text)

    normalized = text.lower().strip()
    for key, (lat, lng) in KNOWN_LOCATIONS.items():
        if key in normalized:
            return ObserverLocation(lat, lng, label=text)

    if settings.geocode_enabled and normalized:
        try:
            result = _geocode_nominatim(text, timeout=settings.geocode_timeout)
        except GeocodingError as e:
            logger.warning("geocoding %r failed, using fallback location: %s", text, e)
            result = None
        if result is not None:
            lat, lng, display = result
            logger.info("resolved %r to %.4f, %.4f (%s)", text, lat, lng, display)
            return ObserverLocation(lat, lng, label=display)

    logger.warning("location %r not found, using fallback coordinates", text)
    return ObserverLocation(
        settings.fallback_latitude, settings.fallback_longitude, label=text
    )


def _parse_coordinate(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise QueryError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise QueryError(f"{name} must be finite, got {value!r}")
    return number


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _check_range(location: ObserverLocation) -> None:
    if not -90 <= location.latitude <= 90 or not -180 <= location.longitude <= 180:
        raise QueryError(
            "Latitude must be between -90 and 90, longitude between -180 and 180"
        )


def localize(day: date, hh_mm: str, lat: float, lng: float) -> datetime:
    """Attach the observer's timezone to a local date and "HH:MM" time.

    Locations with no timezone (open ocean) are treated as UTC.
    """
    dt = datetime.combine(day, datetime.strptime(hh_mm, "%H:%M").time())
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        logger.warning("timezone not found: lat=%s, lng=%s; using UTC", lat, lng)
        return utc.localize(dt)
    local_tz = timezone(tz_str)
    try:
        return local_tz.localize(dt, is_dst=None)
    except (pytz.AmbiguousTimeError, pytz.NonExistentTimeError):
        # DST switch at this wall-clock time; take standard time
        return local_tz.localize(dt, is_dst=False)


def parse_query(request: Mapping[str, Any], settings: Settings | None = None) -> StarMapQuery:
    """Validate a raw request mapping into a StarMapQuery.

    Args:
        request: Mapping with "date" ("YYYY-MM-DD") and optional "time"
            ("HH:MM", local to the observer), "latitude", "longitude",
            "location", "moonLightColor", "includeHidden".
        settings: Runtime settings; loaded from the environment if None.

    Returns:
        StarMapQuery. Without a "time" the instant is 00:00 UTC on the date,
        so a date names the same moon phase for every observer.

    Raises:
        QueryError: On a missing or malformed date/time, bad coordinates, or
            a malformed color.
    """
    settings = settings or load_settings()

    raw_date = request.get("date")
    if not raw_date:
        raise QueryError("Date is required")
    try:
        day = datetime.strptime(sanitize_text(raw_date), "%Y-%m-%d").date()
    except ValueError as e:
        raise QueryError("Please provide a date in YYYY-MM-DD format") from e

    raw_time = request.get("time")
    hh_mm = sanitize_text(raw_time) if raw_time else None
    if hh_mm is not None:
        try:
            datetime.strptime(hh_mm, "%H:%M")
        except ValueError as e:
            raise QueryError("Please provide a time in HH:MM format") from e

    raw_text = request.get("location")
    location_text = (sanitize_text(raw_text) if raw_text else "") or None

    raw_lat, raw_lng = request.get("latitude"), request.get("longitude")
    has_lat = raw_lat not in (None, "")
    has_lng = raw_lng not in (None, "")
    if has_lat != has_lng:
        raise QueryError("latitude and longitude must be given together")
    if has_lat:
        location = ObserverLocation(
            _parse_coordinate("latitude", raw_lat),
            _parse_coordinate("longitude", raw_lng),
            label=location_text,
        )
    elif location_text:
        location = resolve_location(location_text, settings)
    else:
        location = ObserverLocation(settings.default_latitude, settings.default_longitude)
    _check_range(location)

    color = sanitize_text(request.get("moonLightColor") or settings.moon_light_color)
    if not _COLOR_RE.match(color):
        raise QueryError(f"moonLightColor must look like #RRGGBB, got {color!r}")

    if hh_mm is None:
        # A bare date means the start of that UTC day, wherever the observer is
        when = utc.localize(datetime.combine(day, time()))
    else:
        when = localize(day, hh_mm, location.latitude, location.longitude)

    return StarMapQuery(
        date=day,
        when=when,
        location=location,
        moon_light_color=color,
        location_text=location_text,
        include_hidden_planets=_truthy(request.get("includeHidden")),
    )


def format_date(day: date) -> str:
    """Human-readable date with an ordinal day ("January 1st, 2023")."""
    n = day.day
    suffix = "th"
    if not 11 <= n % 100 <= 13:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{_MONTHS[day.month - 1]} {n}{suffix}, {day.year}"


def recolor_moon(svg: str, color: str) -> str:
    """Paint the lit part of a moon SVG in `color` instead of white."""
    if color.lower() == "#ffffff":
        return svg
    return svg.replace(f'fill="{LIGHT}"', f'fill="{color}"')


def build_star_map(query: StarMapQuery) -> StarMapResponse:
    """Run every astronomy component for a validated query.

    Args:
        query: Output of parse_query().

    Returns:
        StarMapResponse; call to_dict() for the wire mapping.
    """
    when = query.when
    lat, lng = query.location.latitude, query.location.longitude

    moon = moon_phase(when)
    constellations = visible_constellations(when, lat, lng)
    planets = visible_planets(when, lat, lng, include_hidden=query.include_hidden_planets)
    next_new, next_full = next_moon_events(when)

    return StarMapResponse(
        date=query.date.isoformat(),
        formatted_date=format_date(query.date),
        location=query.location.label,
        moon=moon,
        moon_svg=recolor_moon(render_moon_phase_svg(moon.phase), query.moon_light_color),
        next_new_moon=next_new,
        next_full_moon=next_full,
        constellations=tuple(constellations),
        planets=tuple(planets),
        star_map_svg=render_star_map_svg(constellations, when, lat, lng),
    )


def is_historical(day: date, now: datetime) -> bool:
    """Dates well in the past never change, so they can be cached longer."""
    return day < (now - _HISTORICAL_AFTER).date()


def run(
    request: Mapping[str, Any],
    cache: TTLCache[str, StarMapResponse] | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Top-level entry point: takes a raw request and returns the response mapping.

    Args:
        request: Raw request mapping (see parse_query()).
        cache: Optional response cache shared between calls.
        settings: Runtime settings; loaded from the environment if None.
        now: Current time, for the historical-date cache policy.

    Returns:
        The camelCase response mapping.

    Raises:
        QueryError: If the request is invalid.
    """
    settings = settings or load_settings()
    query = parse_query(request, settings)

    if cache is None:
        return build_star_map(query).to_dict()

    key = response_cache_key(
        {
            "date": query.date.isoformat(),
            "when": query.when.isoformat(),
            "latitude": f"{query.location.latitude:.2f}",
            "longitude": f"{query.location.longitude:.2f}",
            "location": query.location_text,
            "moonLightColor": query.moon_light_color,
            "includeHidden": query.include_hidden_planets,
        }
    )
    cached = cache.get(key)
    if cached is not None:
        logger.debug("cache hit for %s", query.date)
        return cached.to_dict()

    response = build_star_map(query)
    now = now or datetime.now(utc)
    ttl = (
        settings.historical_cache_ttl_seconds
        if is_historical(query.date, now)
        else settings.cache_ttl_seconds
    )
    cache.set(key, response, ttl)
    return response.to_dict()
