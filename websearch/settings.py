import os


GOOGLE_SEARCH_URL = "https://www.google.com/search"
GOOGLE_MAP_URL = "https://www.google.com/maps/search"
BING_SEARCH_URL = "https://www.bing.com/search"
BRAVE_SEARCH_URL = "https://search.brave.com/search"
DDG_SEARCH_URL = "https://duckduckgo.com/"

ENGINES = (
    "google",
    "google_image",
    "google_video",
    "google_news",
    "google_map",
    "bing",
    "brave",
    "ddg",
)
DEFAULT_ENGINE = "google"

OPEN_ACTION = "open_url"
PRINT_ACTIONS = ("print_url", "print_html_link", "print_org_link")
SAVE_ACTION = "save_html"
RESULT_LINK_ACTIONS = (
    "print_result_link",
    "print_result_html_link",
    "print_result_org_link",
)
AUTOMATION_ACTIONS = (SAVE_ACTION,) + RESULT_LINK_ACTIONS
ACTIONS = (OPEN_ACTION,) + PRINT_ACTIONS + AUTOMATION_ACTIONS
DEFAULT_ACTION = OPEN_ACTION

TIME_PAST_CODES = {
    "h": "h",
    "hour": "h",
    "24hour": "d",
    "day": "d",
    "w": "w",
    "week": "w",
    "m": "m",
    "month": "m",
    "y": "y",
    "year": "y",
}
TIME_PAST_CHOICES = ("hour", "24hour", "day", "week", "month", "year")
TIME_RANGE_DATE_FORMAT = "%m/%d/%Y"

DEFAULT_NUM = 100
DEFAULT_WEB_TIMEOUT_S = 30
MIN_WEB_TIMEOUT_S = 5

STDIN_SENTINEL = "-"
QUERY_LABEL_FALLBACK = "(query)"

DEFAULT_CONFIG_FILE = os.path.join("config", "websearch.json")
CONFIG_KEYS = (
    "engine",
    "action",
    "num",
    "prepend",
    "append",
    "delay",
    "min_delay",
    "max_delay",
    "headless",
    "web_timeout_s",
)
ENV_ENGINE = "WEBSEARCH_ENGINE"
ENV_ACTION = "WEBSEARCH_ACTION"
ENV_LOG_LEVEL = "WEBSEARCH_LOG_LEVEL"
