from urllib.parse import quote

from .errors import ConflictError, UnknownEngine
from .logging_utils import log_warn
from .settings import (
    BING_SEARCH_URL,
    BRAVE_SEARCH_URL,
    DDG_SEARCH_URL,
    DEFAULT_NUM,
    GOOGLE_MAP_URL,
    GOOGLE_SEARCH_URL,
)


def escape_query(query):
    return quote(query, safe="")


def _google_url(query_esc, time_param, num, mode=None):
    url = f"{GOOGLE_SEARCH_URL}?num={num}&q={query_esc}"
    if mode:
        url += f"&tbm={mode}"
    if time_param:
        url += f"&{time_param}"
    return url


def build_google(query_esc, time_param="", num=None):
    return _google_url(query_esc, time_param, num or DEFAULT_NUM)


def build_google_image(query_esc, time_param="", num=None):
    return _google_url(query_esc, time_param, num or DEFAULT_NUM, mode="isch")


def build_google_video(query_esc, time_param="", num=None):
    # Same mode parameter as image search.
    return _google_url(query_esc, time_param, num or DEFAULT_NUM, mode="isch")


def build_google_news(query_esc, time_param="", num=None):
    return _google_url(query_esc, time_param, num or DEFAULT_NUM, mode="nws")


def build_google_map(query_esc, time_param="", num=None):
    if time_param:
        raise ConflictError("Can't specify time period for map search")
    return f"{GOOGLE_MAP_URL}/{query_esc}/"


def _warn_unsupported(label, time_param, num):
    if time_param:
        log_warn(f"Time limit options not supported yet with {label} search")
    if num is not None:
        log_warn(f"Num option not supported yet with {label} search")


def build_bing(query_esc, time_param="", num=None):
    _warn_unsupported("Bing", time_param, num)
    return f"{BING_SEARCH_URL}?source=web&q={query_esc}"


def build_brave(query_esc, time_param="", num=None):
    _warn_unsupported("Brave", time_param, num)
    return f"{BRAVE_SEARCH_URL}?source=web&q={query_esc}"


def build_ddg(query_esc, time_param="", num=None):
    _warn_unsupported("DDG", time_param, num)
    return f"{DDG_SEARCH_URL}?q={query_esc}"


URL_BUILDERS = {
    "google": build_google,
    "google_image": build_google_image,
    "google_video": build_google_video,
    "google_news": build_google_news,
    "google_map": build_google_map,
    "bing": build_bing,
    "brave": build_brave,
    "ddg": build_ddg,
}


def validate_engine(engine):
    if engine not in URL_BUILDERS:
        raise UnknownEngine(engine)
    return engine


def build_url(engine, query_esc, time_param="", num=None):
    """Return the search URL for an already-escaped query.

    ``num`` is the explicitly requested result count; ``None`` means the
    caller did not ask for one (Google engines then use the default, the
    other engines stay silent about it).
    """
    builder = URL_BUILDERS.get(engine)
    if builder is None:
        raise UnknownEngine(engine)
    return builder(query_esc, time_param=time_param, num=num)
