"""
URL builder tests
"""

from urllib.parse import unquote

import pytest

from websearch.engines import URL_BUILDERS, build_url, escape_query
from websearch.errors import ConflictError, UnknownEngine
from websearch.settings import ENGINES


class TestEscapeQuery:
    """Test query escaping"""

    def test_space_and_reserved(self):
        assert escape_query("a b&c/d") == "a%20b%26c%2Fd"

    def test_unreserved_untouched(self):
        assert escape_query("A-z_0.9~") == "A-z_0.9~"

    @pytest.mark.parametrize("query", ["lee mack imdb", "100% c++ & co?", "jakarta/selatan", "café"])
    def test_round_trip(self, query):
        assert unquote(escape_query(query)) == query


class TestGoogle:
    """Test Google engines"""

    def test_web(self):
        assert (
            build_url("google", "cats", num=50)
            == "https://www.google.com/search?num=50&q=cats"
        )

    def test_default_num(self):
        assert build_url("google", "cats") == "https://www.google.com/search?num=100&q=cats"

    def test_time_fragment(self):
        url = build_url("google", "cats", "tbs=qdr:m")
        assert url == "https://www.google.com/search?num=100&q=cats&tbs=qdr:m"

    def test_image(self):
        assert build_url("google_image", "cats").endswith("&q=cats&tbm=isch")

    def test_video_same_mode_as_image(self):
        assert build_url("google_video", "cats") == build_url("google_image", "cats")

    def test_news(self):
        url = build_url("google_news", "cats", "tbs=qdr:d", num=10)
        assert url == "https://www.google.com/search?num=10&q=cats&tbm=nws&tbs=qdr:d"


class TestGoogleMap:
    """Test the map engine"""

    def test_map(self):
        url = build_url("google_map", "jakarta%20selatan", num=20)
        assert url == "https://www.google.com/maps/search/jakarta%20selatan/"
        assert "num=" not in url

    def test_map_rejects_time(self):
        with pytest.raises(ConflictError) as excinfo:
            build_url("google_map", "bogor", "tbs=qdr:w")
        assert excinfo.value.status == 409


class TestAlternateEngines:
    """Test engines without count/time support"""

    @pytest.mark.parametrize(
        "engine, expected",
        [
            ("bing", "https://www.bing.com/search?source=web&q=cats"),
            ("brave", "https://search.brave.com/search?source=web&q=cats"),
            ("ddg", "https://duckduckgo.com/?q=cats"),
        ],
    )
    def test_base_urls(self, engine, expected, log_lines):
        assert build_url(engine, "cats") == expected
        assert log_lines == []

    def test_num_dropped_with_warning(self, log_lines):
        url = build_url("brave", "cats", num=50)
        assert "num" not in url
        assert len(log_lines) == 1
        assert "WARN" in log_lines[0]
        assert "Num option not supported" in log_lines[0]

    def test_time_dropped_with_warning(self, log_lines):
        url = build_url("ddg", "cats", "tbs=qdr:y", num=5)
        assert "tbs" not in url
        assert len(log_lines) == 2
        assert "Time limit options not supported" in log_lines[0]


class TestDispatch:
    """Test the engine table"""

    def test_every_engine_has_builder(self):
        assert set(URL_BUILDERS) == set(ENGINES)

    def test_unknown_engine(self):
        with pytest.raises(UnknownEngine):
            build_url("altavista", "cats")

    @pytest.mark.parametrize("engine", ENGINES)
    def test_pure(self, engine):
        assert build_url(engine, "same%20query") == build_url(engine, "same%20query")
