"""Parse the Environment Canada city weather Atom feed.

Entry titles carry the structured data, e.g.::

    Current Conditions: Light Snow, -3.4°C
    Sunday night: Cloudy periods. Low minus 9.
    Wednesday: Chance of showers. High 6. POP 40%
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import StrEnum

from weatherdesk.models.forecast import DayOfWeek, Temperature, TemperatureKind

logger = logging.getLogger(__name__)

NO_WARNINGS_PREFIX = "No watches or warnings in effect"
ISSUED_MARKER = "Forecast issued"


class FeedParseError(ValueError):
    """Raised when the feed body is not parseable XML."""


class FeedTerm(StrEnum):
    CURRENT = "Current Conditions"
    FORECAST = "Weather Forecasts"
    WARNINGS = "Warnings and Watches"


@dataclass(frozen=True)
class FeedEntry:
    title: str
    term: FeedTerm
    summary: str


@dataclass(frozen=True)
class ParsedForecast:
    day_of_week: DayOfWeek
    is_night: bool
    description: str
    temperature: Temperature


@dataclass(frozen=True)
class ParsedCurrent:
    description: str
    temperature: Temperature


# Order matters: longer phrases before their prefixes
_HIGH_PHRASES = ("Temperature steady near ", "Temperature rising to ", "High ")
_LOW_PHRASES = ("Temperature falling to ", "Low ")

_DAYS_PAT = "|".join(d.value for d in DayOfWeek)
_PHRASE_PAT = "|".join(re.escape(p) for p in _HIGH_PHRASES + _LOW_PHRASES)
_NUMBER_PAT = r"zero|(?:minus|plus)\s*\d+(?:\.\d+)?|\d+(?:\.\d+)?"

FORECAST_TITLE_RE = re.compile(
    rf"^({_DAYS_PAT})( night)?:\s*(.*?)\s*({_PHRASE_PAT})({_NUMBER_PAT})"
)
CURRENT_TITLE_RE = re.compile(
    r"^Current Conditions:\s*(.+?),\s*(-?\d+(?:\.\d+)?)"
)


def parse_number(text: str) -> float:
    """Parse a spelled-out signed number: 'zero', 'minus 9', 'plus 2', '6'."""
    text = text.strip()
    if text == "zero":
        return 0.0
    if text.startswith("minus"):
        return -float(text[len("minus"):].strip())
    if text.startswith("plus"):
        return float(text[len("plus"):].strip())
    return float(text)


def parse_forecast_title(title: str) -> ParsedForecast | None:
    """Parse a 'Weather Forecasts' entry title. Returns None if it doesn't match."""
    m = FORECAST_TITLE_RE.match(title.strip())
    if m is None:
        return None

    day_name, night, description, phrase, number = m.groups()
    kind = TemperatureKind.HIGH if phrase in _HIGH_PHRASES else TemperatureKind.LOW
    return ParsedForecast(
        day_of_week=DayOfWeek(day_name),
        is_night=night is not None,
        description=description.strip(),
        temperature=Temperature(kind=kind, value=parse_number(number)),
    )


def parse_current_title(title: str) -> ParsedCurrent | None:
    """Parse a 'Current Conditions' entry title. Returns None if it doesn't match."""
    m = CURRENT_TITLE_RE.match(title.strip())
    if m is None:
        return None
    description, number = m.groups()
    return ParsedCurrent(
        description=description.strip(),
        temperature=Temperature(kind=TemperatureKind.CURRENT, value=float(number)),
    )


def celsius_to_fahrenheit(t: Temperature) -> Temperature:
    return Temperature(kind=t.kind, value=t.value * 9 / 5 + 32)


def parse_feed(xml_bytes: bytes) -> list[FeedEntry]:
    """Extract entries from the Atom feed, in feed order.

    Summaries are cut before the trailing 'Forecast issued ...' note, and the
    placeholder warning entry is dropped when nothing is in effect.
    """
    try:
        root = ET.fromstring(xml_bytes)
    except ET.ParseError as e:
        raise FeedParseError(f"Invalid feed XML: {e}") from e

    entries: list[FeedEntry] = []
    for el in root.findall(".//{*}entry"):
        title = (el.findtext("{*}title") or "").strip()
        category = el.find("{*}category")
        term_str = category.get("term", "") if category is not None else ""
        try:
            term = FeedTerm(term_str)
        except ValueError:
            logger.warning("Skipping feed entry with unknown category %r: %s", term_str, title)
            continue

        if term == FeedTerm.WARNINGS and title.startswith(NO_WARNINGS_PREFIX):
            continue

        entries.append(
            FeedEntry(
                title=title,
                term=term,
                summary=_truncate_summary(el.findtext("{*}summary") or ""),
            )
        )
    return entries


def _truncate_summary(summary: str) -> str:
    index = summary.rfind(ISSUED_MARKER)
    if index == -1:
        return summary
    return summary[:index].strip()
