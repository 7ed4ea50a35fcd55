import os
import sys
import webbrowser

from playwright.sync_api import sync_playwright

from .logging_utils import log_debug, log_warn
from .settings import DEFAULT_WEB_TIMEOUT_S, MIN_WEB_TIMEOUT_S


def open_browser(url):
    """Open ``url`` in the default browser (``BROWSER`` env is honoured)."""
    try:
        return bool(webbrowser.open(url))
    except webbrowser.Error as exc:
        log_warn("Failed to launch browser.", url=url, error=str(exc))
        return False


def ensure_playwright_browsers():
    if os.getenv("PLAYWRIGHT_BROWSERS_PATH"):
        return

    if getattr(sys, "frozen", False):
        base_dir = getattr(sys, "_MEIPASS", os.path.dirname(sys.executable))
        bundled_path = os.path.join(base_dir, "playwright-browsers")
        if os.path.exists(bundled_path):
            os.environ["PLAYWRIGHT_BROWSERS_PATH"] = bundled_path
            return

    local_path = os.path.join(os.getcwd(), "playwright-browsers")
    if os.path.exists(local_path):
        os.environ["PLAYWRIGHT_BROWSERS_PATH"] = local_path


LINKS_SCRIPT = """
() => Array.from(document.querySelectorAll("a[href]"))
    .filter((a) => a instanceof HTMLAnchorElement)
    .map((a) => [a.href, (a.innerText || a.textContent || "").trim()])
"""


class PageHandle:
    def __init__(self, page, url):
        self.page = page
        self.url = url

    def html(self):
        return self.page.content()

    def links(self):
        return [(str(href), str(text)) for href, text in self.page.evaluate(LINKS_SCRIPT)]


class AutomationSession:
    """A single Playwright browser page reused for every navigation."""

    def __init__(self, headless=False, web_timeout_s=DEFAULT_WEB_TIMEOUT_S):
        self.headless = headless
        self.web_timeout_s = max(MIN_WEB_TIMEOUT_S, int(web_timeout_s or 0))
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    @property
    def connected(self):
        return self.page is not None

    def connect(self):
        if self.connected:
            return self
        ensure_playwright_browsers()
        log_debug("Starting Playwright browser.", headless=self.headless)
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            headless=self.headless,
            args=["--disable-blink-features=AutomationControlled"],
        )
        self._context = self._browser.new_context()
        self.page = self._context.new_page()
        self.page.set_default_timeout(self.web_timeout_s * 1000)
        self.page.set_default_navigation_timeout(self.web_timeout_s * 1000)
        return self

    def navigate(self, url):
        if not self.connected:
            self.connect()
        log_debug("Retrieving URL.", url=url)
        self.page.goto(url, wait_until="domcontentloaded")
        return PageHandle(self.page, url)

    def close(self):
        if self._context is not None:
            self._context.close()
        if self._browser is not None:
            self._browser.close()
        if self._playwright is not None:
            self._playwright.stop()
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None
