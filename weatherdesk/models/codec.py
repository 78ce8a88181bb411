"""JSON wire codec for forecast entries exchanged with the backend.

Entries are adjacently tagged: ``{"type": "<variant>", "content": {...}}``.
Temperatures use the same shape with the raw degree value as content.
"""

from typing import Any, assert_never

from weatherdesk.models.forecast import (
    CurrentEntry,
    DayNight,
    DayOfWeek,
    EntryKind,
    ForecastEntry,
    FutureEntry,
    Temperature,
    TemperatureKind,
    WarningEntry,
)


class ForecastDecodeError(ValueError):
    """Raised when a payload does not describe a list of forecast entries."""


def encode_entries(entries: list[ForecastEntry]) -> list[dict]:
    return [encode_entry(e) for e in entries]


def encode_entry(entry: ForecastEntry) -> dict:
    if isinstance(entry, CurrentEntry):
        return {
            "type": EntryKind.CURRENT.value,
            "content": {
                "summary": entry.summary,
                "celsius": _encode_temperature(entry.celsius),
                "fahrenheit": _encode_temperature(entry.fahrenheit),
                "description": entry.description,
            },
        }
    elif isinstance(entry, FutureEntry):
        return {
            "type": EntryKind.FUTURE.value,
            "content": {
                "day": _encode_day_night(entry.day),
                "night": _encode_day_night(entry.night),
            },
        }
    elif isinstance(entry, WarningEntry):
        return {
            "type": EntryKind.WARNING.value,
            "content": {"title": entry.title, "summary": entry.summary},
        }
    else:
        assert_never(entry)


def _encode_temperature(t: Temperature) -> dict:
    return {"type": t.kind.value, "content": t.value}


def _encode_day_night(dn: DayNight | None) -> dict | None:
    if dn is None:
        return None
    return {
        "celsius": _encode_temperature(dn.celsius),
        "fahrenheit": _encode_temperature(dn.fahrenheit),
        "day_of_week": dn.day_of_week.value,
        "description": dn.description,
        "summary": dn.summary,
    }


def decode_entries(payload: Any) -> list[ForecastEntry]:
    """Decode a backend payload into forecast entries.

    Accepts a bare list of entries or the backend envelope
    ``{"forecasts": [...], "fetched": "..."}``.
    """
    if isinstance(payload, dict) and "forecasts" in payload:
        payload = payload["forecasts"]
    if not isinstance(payload, list):
        raise ForecastDecodeError(
            f"Expected a list of forecast entries, got {type(payload).__name__}"
        )
    return [decode_entry(item) for item in payload]


def decode_entry(raw: Any) -> ForecastEntry:
    if not isinstance(raw, dict):
        raise ForecastDecodeError(f"Forecast entry must be an object: {raw!r}")
    tag = raw.get("type")
    content = _require_dict(raw.get("content"), "content")

    if tag == EntryKind.CURRENT:
        return CurrentEntry(
            summary=_require_str(content, "summary"),
            celsius=_decode_temperature(content.get("celsius")),
            fahrenheit=_decode_temperature(content.get("fahrenheit")),
            description=_require_str(content, "description"),
        )
    if tag == EntryKind.FUTURE:
        day = _decode_day_night(content.get("day"))
        night = _decode_day_night(content.get("night"))
        try:
            return FutureEntry(day=day, night=night)
        except ValueError as e:
            raise ForecastDecodeError(str(e)) from e
    if tag == EntryKind.WARNING:
        return WarningEntry(
            title=_require_str(content, "title"),
            summary=_require_str(content, "summary"),
        )
    raise ForecastDecodeError(f"Unknown forecast entry type: {tag!r}")


def _decode_temperature(raw: Any) -> Temperature:
    raw = _require_dict(raw, "temperature")
    try:
        kind = TemperatureKind(raw.get("type"))
    except ValueError as e:
        raise ForecastDecodeError(f"Unknown temperature type: {raw.get('type')!r}") from e
    value = raw.get("content")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ForecastDecodeError(f"Temperature value must be a number: {value!r}")
    return Temperature(kind=kind, value=float(value))


def _decode_day_night(raw: Any) -> DayNight | None:
    if raw is None:
        return None
    raw = _require_dict(raw, "day/night forecast")
    try:
        day_of_week = DayOfWeek(raw.get("day_of_week"))
    except ValueError as e:
        raise ForecastDecodeError(f"Unknown day of week: {raw.get('day_of_week')!r}") from e
    return DayNight(
        celsius=_decode_temperature(raw.get("celsius")),
        fahrenheit=_decode_temperature(raw.get("fahrenheit")),
        day_of_week=day_of_week,
        description=_require_str(raw, "description"),
        summary=_require_str(raw, "summary"),
    )


def _require_dict(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ForecastDecodeError(f"Expected {what} object, got {value!r}")
    return value


def _require_str(obj: dict, key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise ForecastDecodeError(f"Field {key!r} must be a string, got {value!r}")
    return value
