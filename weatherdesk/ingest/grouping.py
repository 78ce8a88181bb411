"""Group parsed feed entries into forecast entries."""

import logging

from weatherdesk.ingest.feed_parser import (
    FeedEntry,
    FeedTerm,
    celsius_to_fahrenheit,
    parse_current_title,
    parse_forecast_title,
)
from weatherdesk.models.forecast import (
    CurrentEntry,
    DayNight,
    DayOfWeek,
    ForecastEntry,
    FutureEntry,
    WarningEntry,
)

logger = logging.getLogger(__name__)


def to_forecast(feed_entries: list[FeedEntry]) -> list[ForecastEntry]:
    """Convert feed entries into forecast entries.

    Current conditions and warnings keep their feed order. Day and night
    forecasts for the same weekday are paired into one FutureEntry; the
    futures follow the other entries, ordered by where each weekday first
    appeared in the feed.
    """
    result: list[ForecastEntry] = []
    halves: dict[DayOfWeek, dict[str, DayNight]] = {}

    for entry in feed_entries:
        if entry.term == FeedTerm.CURRENT:
            current = parse_current_title(entry.title)
            if current is None:
                logger.warning("Unparsable current conditions: %s", entry.title)
                continue
            result.append(
                CurrentEntry(
                    summary=entry.summary,
                    celsius=current.temperature,
                    fahrenheit=celsius_to_fahrenheit(current.temperature),
                    description=current.description,
                )
            )
        elif entry.term == FeedTerm.WARNINGS:
            result.append(WarningEntry(title=entry.title, summary=entry.summary))
        else:
            parsed = parse_forecast_title(entry.title)
            if parsed is None:
                logger.warning("No day parsed from forecast: %s", entry.title)
                continue
            # dicts keep insertion order, so the first half seen fixes the position
            slot = halves.setdefault(parsed.day_of_week, {})
            slot["night" if parsed.is_night else "day"] = DayNight(
                celsius=parsed.temperature,
                fahrenheit=celsius_to_fahrenheit(parsed.temperature),
                day_of_week=parsed.day_of_week,
                description=parsed.description,
                summary=entry.summary,
            )

    for pair in halves.values():
        result.append(FutureEntry(day=pair.get("day"), night=pair.get("night")))
    return result
