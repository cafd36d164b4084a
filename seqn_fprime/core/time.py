"""Duration and timestamp helpers shared by the time-tag codec.

WHY: Relative time tags arrive in two textual shapes: a full
``[-][DDDT]hh:mm:ss[.fff]`` duration and a simplified bare seconds
count (``R10``, ``R1.5``). FPrime needs them in one canonical form, so
the codec needs pattern checks, a parser, a balancer that carries
overflow upward, and a formatter that renders each field at its
canonical width.

HOW: Anchored regexes classify text (``validate_time``). Parsing
produces a frozen Duration of non-negative fields plus a sign flag.
``balance_duration`` normalises through total milliseconds.
``get_duration_time_components`` renders each field as a string the
codec can concatenate directly.

RULES:
- Duration fields are never negative; the sign lives in is_negative
- Fractional seconds are rounded half up to whole milliseconds
- Days render 3-wide (omitted when 0); h/m/s render 2-wide
- Milliseconds render as ``.mmm`` and are omitted when 0
- get_balanced_duration always renders ``.mmm``, even for 0 ms
"""

from __future__ import annotations

import enum
import re
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import dataclass

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR

_ABSOLUTE_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<doy>\d{3})T(?P<hr>[0-2]\d):(?P<mins>[0-5]\d):(?P<secs>[0-5]\d)(?P<ms>\.\d+)?$"
)
_DURATION_RE = re.compile(
    r"^(?P<sign>[+-]?)(?:(?P<doy>\d{3})T)?(?P<hr>\d{2}):(?P<mins>\d{2}):(?P<secs>\d{2})(?P<ms>\.\d+)?$"
)
_SECONDS_RE = re.compile(r"^(?P<sign>[+-]?)(?P<secs>\d+)(?P<ms>\.\d+)?$")


class TimeTypes(str, enum.Enum):
    """Textual time forms recognised by validate_time."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    RELATIVE_SIMPLE = "relative_simple"
    EPOCH = "epoch"
    EPOCH_SIMPLE = "epoch_simple"


_PATTERNS = {
    TimeTypes.ABSOLUTE: _ABSOLUTE_RE,
    TimeTypes.RELATIVE: _DURATION_RE,
    TimeTypes.RELATIVE_SIMPLE: _SECONDS_RE,
    TimeTypes.EPOCH: _DURATION_RE,
    TimeTypes.EPOCH_SIMPLE: _SECONDS_RE,
}


class InvalidDurationError(ValueError):
    """Raised when text is neither a full nor a simplified duration."""


@dataclass(frozen=True)
class Duration:
    """A signed duration split into non-negative calendar fields."""

    is_negative: bool = False
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    def total_milliseconds(self) -> int:
        magnitude = (
            self.days * _MS_PER_DAY
            + self.hours * _MS_PER_HOUR
            + self.minutes * _MS_PER_MINUTE
            + self.seconds * _MS_PER_SECOND
            + self.milliseconds
        )
        return -magnitude if self.is_negative else magnitude


@dataclass(frozen=True)
class DurationTimeComponents:
    """Canonical string rendering of each Duration field."""

    is_negative: str
    days: str
    hours: str
    minutes: str
    seconds: str
    milliseconds: str


def validate_time(text: str, time_type: TimeTypes) -> bool:
    """Return True when ``text`` fully matches the pattern for ``time_type``."""
    return _PATTERNS[time_type].match(text) is not None


def _fraction_to_ms(fraction: str | None) -> int:
    if not fraction:
        return 0
    ms = (Decimal("0" + fraction) * _MS_PER_SECOND).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(ms)


def parse_duration_string(text: str) -> Duration:
    """Parse a full or simplified duration.

    A simplified duration (bare seconds) is balanced into larger fields.
    A full duration keeps its fields as written.

    Raises:
        InvalidDurationError: ``text`` matches neither form.
    """
    text = text.strip()
    match = _DURATION_RE.match(text)
    if match:
        ms = _fraction_to_ms(match.group("ms"))
        seconds = int(match.group("secs"))
        # ".9999" rounds up to a whole second
        seconds, ms = seconds + ms // _MS_PER_SECOND, ms % _MS_PER_SECOND
        return Duration(
            is_negative=match.group("sign") == "-",
            days=int(match.group("doy") or 0),
            hours=int(match.group("hr")),
            minutes=int(match.group("mins")),
            seconds=seconds,
            milliseconds=ms,
        )

    match = _SECONDS_RE.match(text)
    if match:
        total = int(match.group("secs")) * _MS_PER_SECOND + _fraction_to_ms(match.group("ms"))
        return _from_milliseconds(total, match.group("sign") == "-")

    raise InvalidDurationError("Invalid duration: {!r}".format(text))


def _from_milliseconds(total_ms: int, is_negative: bool) -> Duration:
    days, rest = divmod(total_ms, _MS_PER_DAY)
    hours, rest = divmod(rest, _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    seconds, milliseconds = divmod(rest, _MS_PER_SECOND)
    return Duration(
        is_negative=is_negative and total_ms != 0,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        milliseconds=milliseconds,
    )


def balance_duration(duration: Duration) -> Duration:
    """Carry overflowing fields upward (e.g. 90 s → 1 min 30 s)."""
    total = duration.total_milliseconds()
    return _from_milliseconds(abs(total), total < 0)


def get_balanced_duration(text: str) -> str:
    """Render ``text`` as ``[-][DDDT]hh:mm:ss.mmm`` after balancing.

    Raises:
        InvalidDurationError: ``text`` is not a duration.
    """
    balanced = balance_duration(parse_duration_string(text))
    days = "{:03d}T".format(balanced.days) if balanced.days else ""
    return "{}{}{:02d}:{:02d}:{:02d}.{:03d}".format(
        "-" if balanced.is_negative else "",
        days,
        balanced.hours,
        balanced.minutes,
        balanced.seconds,
        balanced.milliseconds,
    )


def get_duration_time_components(duration: Duration) -> DurationTimeComponents:
    """Render each field of ``duration`` at its canonical width."""
    return DurationTimeComponents(
        is_negative="-" if duration.is_negative else "",
        days="{:03d}".format(duration.days) if duration.days else "",
        hours="{:02d}".format(duration.hours),
        minutes="{:02d}".format(duration.minutes),
        seconds="{:02d}".format(duration.seconds),
        milliseconds=".{:03d}".format(duration.milliseconds) if duration.milliseconds else "",
    )
