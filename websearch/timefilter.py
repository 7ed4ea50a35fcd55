from dataclasses import dataclass
from datetime import date
from typing import Optional
from urllib.parse import quote

from .errors import ConfigError, InvalidTimeKeyword
from .settings import TIME_PAST_CODES, TIME_RANGE_DATE_FORMAT


@dataclass(frozen=True)
class TimeFilter:
    """Either a relative keyword (``past``) or a ``start``/``end`` date pair.

    An empty filter (nothing set) means no time restriction.
    """

    past: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.past is not None and (self.start or self.end):
            raise ConfigError("Specify either time_past or time_start/time_end, not both.")
        if (self.start is None) != (self.end is None):
            raise ConfigError("time_start and time_end must be specified together.")

    @classmethod
    def relative(cls, keyword):
        return cls(past=keyword)

    @classmethod
    def between(cls, start, end):
        return cls(start=start, end=end)

    @property
    def is_empty(self):
        return self.past is None and self.start is None


NO_TIME_FILTER = TimeFilter()


def encode_time_filter(time_filter):
    if time_filter is None or time_filter.is_empty:
        return ""

    if time_filter.past is not None:
        code = TIME_PAST_CODES.get(time_filter.past)
        if code is None:
            raise InvalidTimeKeyword(time_filter.past)
        return f"tbs=qdr:{code}"

    start = time_filter.start.strftime(TIME_RANGE_DATE_FORMAT)
    end = time_filter.end.strftime(TIME_RANGE_DATE_FORMAT)
    return "tbs=" + quote(f"cdr:1,cd_min:{start},cd_max:{end}", safe="")
