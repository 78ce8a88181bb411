"""Map forecast entries to presentation nodes for a given temperature unit.

Current readings are measured, so Celsius shows one fractional digit. Future
readings are rounded forecast buckets and show none. Tooltip text is the
summary as delivered by the backend; it may contain inline markup and is not
escaped here.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import assert_never

from weatherdesk.models.common import TemperatureUnit
from weatherdesk.models.forecast import (
    CurrentEntry,
    DayNight,
    EntryKind,
    ForecastEntry,
    FutureEntry,
    Temperature,
    WarningEntry,
)

NOW_LABEL = "Now"
CURRENT_FRACTION_DIGITS = 1
FUTURE_FRACTION_DIGITS = 0


class BlockSlot(StrEnum):
    NOW = "now"
    DAY = "day"
    NIGHT = "night"


@dataclass(frozen=True)
class ReadingBlock:
    slot: BlockSlot
    temperature: str
    description: str
    tooltip: str | None = None


@dataclass(frozen=True)
class PresentationNode:
    kind: EntryKind
    label: str
    blocks: tuple[ReadingBlock, ...] = ()
    tooltip: str | None = None


def format_temperature(
    value: float, unit: TemperatureUnit, fraction_digits: int = 0
) -> str:
    """Format a raw degree value: ``21.4°`` in Celsius, ``71°F`` in Fahrenheit."""
    if unit != TemperatureUnit.CELSIUS:
        fraction_digits = 0
    # readings that round to zero from below would print as "-0"
    value = round(value, fraction_digits) + 0.0
    if unit == TemperatureUnit.CELSIUS:
        return f"{value:.{fraction_digits}f}°"
    return f"{value:.0f}°F"


def _reading(
    celsius: Temperature,
    fahrenheit: Temperature,
    unit: TemperatureUnit,
    fraction_digits: int,
) -> str:
    t = celsius if unit == TemperatureUnit.CELSIUS else fahrenheit
    return format_temperature(t.value, unit, fraction_digits)


def render(entry: ForecastEntry, unit: TemperatureUnit) -> PresentationNode:
    if isinstance(entry, CurrentEntry):
        return _render_current(entry, unit)
    elif isinstance(entry, FutureEntry):
        return _render_future(entry, unit)
    elif isinstance(entry, WarningEntry):
        return _render_warning(entry)
    else:
        assert_never(entry)


def render_all(
    entries: list[ForecastEntry] | tuple[ForecastEntry, ...], unit: TemperatureUnit
) -> list[PresentationNode]:
    return [render(e, unit) for e in entries]


def _render_current(entry: CurrentEntry, unit: TemperatureUnit) -> PresentationNode:
    block = ReadingBlock(
        slot=BlockSlot.NOW,
        temperature=_reading(
            entry.celsius, entry.fahrenheit, unit, CURRENT_FRACTION_DIGITS
        ),
        description=entry.description,
    )
    return PresentationNode(
        kind=EntryKind.CURRENT,
        label=NOW_LABEL,
        blocks=(block,),
        tooltip=entry.summary,
    )


def _render_future(entry: FutureEntry, unit: TemperatureUnit) -> PresentationNode:
    blocks = []
    for slot, half in ((BlockSlot.DAY, entry.day), (BlockSlot.NIGHT, entry.night)):
        if half is not None:
            blocks.append(_render_half(slot, half, unit))
    return PresentationNode(
        kind=EntryKind.FUTURE,
        label=entry.day_of_week.value,
        blocks=tuple(blocks),
    )


def _render_half(slot: BlockSlot, half: DayNight, unit: TemperatureUnit) -> ReadingBlock:
    return ReadingBlock(
        slot=slot,
        temperature=_reading(
            half.celsius, half.fahrenheit, unit, FUTURE_FRACTION_DIGITS
        ),
        description=half.description,
        tooltip=half.summary,
    )


def _render_warning(entry: WarningEntry) -> PresentationNode:
    return PresentationNode(
        kind=EntryKind.WARNING,
        label=entry.title,
        tooltip=entry.summary,
    )
