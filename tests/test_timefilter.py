"""
Time filter encoding tests
"""

from datetime import date
from urllib.parse import unquote

import pytest

from websearch.errors import ConfigError, InvalidTimeKeyword
from websearch.timefilter import NO_TIME_FILTER, TimeFilter, encode_time_filter


class TestRelative:
    """Test relative time keywords"""

    @pytest.mark.parametrize(
        "keyword, code",
        [
            ("hour", "h"),
            ("24hour", "d"),
            ("day", "d"),
            ("week", "w"),
            ("month", "m"),
            ("year", "y"),
            ("w", "w"),
        ],
    )
    def test_keyword_codes(self, keyword, code):
        assert encode_time_filter(TimeFilter.relative(keyword)) == f"tbs=qdr:{code}"

    def test_unknown_keyword(self):
        with pytest.raises(InvalidTimeKeyword) as excinfo:
            encode_time_filter(TimeFilter.relative("decade"))
        assert excinfo.value.status == 400
        assert "decade" in excinfo.value.message


class TestRange:
    """Test explicit date ranges"""

    def test_range_fragment(self):
        fragment = encode_time_filter(
            TimeFilter.between(date(2023, 1, 5), date(2023, 2, 28))
        )
        assert fragment.startswith("tbs=")
        assert "/" not in fragment
        assert unquote(fragment[len("tbs="):]) == "cdr:1,cd_min:01/05/2023,cd_max:02/28/2023"

    def test_start_without_end(self):
        with pytest.raises(ConfigError):
            TimeFilter(start=date(2023, 1, 1))

    def test_relative_and_range(self):
        with pytest.raises(ConfigError):
            TimeFilter(past="week", start=date(2023, 1, 1), end=date(2023, 1, 2))


class TestEmpty:
    """Test absence of a time filter"""

    def test_no_filter(self):
        assert NO_TIME_FILTER.is_empty
        assert encode_time_filter(NO_TIME_FILTER) == ""

    def test_none(self):
        assert encode_time_filter(None) == ""
