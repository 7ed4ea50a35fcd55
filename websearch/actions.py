import html
import os
import re

from .browser import AutomationSession, open_browser
from .errors import UnknownAction
from .logging_utils import log_info, log_trace
from .settings import (
    ACTIONS,
    AUTOMATION_ACTIONS,
    OPEN_ACTION,
    QUERY_LABEL_FALLBACK,
    SAVE_ACTION,
)


def format_html_link(url, label):
    label_esc = html.escape(QUERY_LABEL_FALLBACK if label is None else label)
    return f'<a href="{url}">{label_esc}</a>'


def format_org_link(url, label):
    return f"[[{url}][{QUERY_LABEL_FALLBACK if label is None else label}]]"


def format_plain_link(url, label):
    return url


ROW_FORMATTERS = {
    "print_url": format_plain_link,
    "print_html_link": format_html_link,
    "print_org_link": format_org_link,
    "print_result_link": format_plain_link,
    "print_result_html_link": format_html_link,
    "print_result_org_link": format_org_link,
}


def sanitize_query(query):
    return re.sub(r"[^A-Za-z0-9_-]+", "_", query)


def build_save_filename(index, query, engine):
    return f"{index + 1}-{sanitize_query(query)}.{engine}.html"


def next_free_path(path):
    candidate = path
    suffix = 0
    while os.path.exists(candidate):
        suffix += 1
        candidate = f"{path}.{suffix}"
    return candidate


def write_if_absent(filename, content, directory=None):
    path = os.path.join(directory or os.getcwd(), filename)
    target = next_free_path(path)
    # "x" never truncates a file that appeared after the existence check
    with open(target, "x", encoding="utf-8") as handle:
        handle.write(content)
    return target


def validate_action(action):
    if action not in ACTIONS:
        raise UnknownAction(action)
    return action


class ActionDispatcher:
    """Performs one action per built query URL.

    The automation session is created on the first action that needs it and
    reused for the rest of the run.
    """

    def __init__(
        self,
        action,
        engine,
        launcher=open_browser,
        session_factory=None,
        output_dir=None,
    ):
        self.action = validate_action(action)
        self.engine = engine
        self.launcher = launcher
        self.session_factory = session_factory or AutomationSession
        self.output_dir = output_dir
        self._session = None

    @property
    def is_open_action(self):
        return self.action == OPEN_ACTION

    @property
    def session(self):
        if self._session is None:
            log_trace("Instantiating automation session.")
            self._session = self.session_factory()
            self._session.connect()
        return self._session

    def dispatch(self, index, url, query):
        """Return ``(status, message)`` for open_url, output rows otherwise."""
        if self.is_open_action:
            if self.launcher(url):
                return 200, "OK"
            return 500, "Failed"

        if self.action in AUTOMATION_ACTIONS:
            return self._visit(index, url, query)

        return [ROW_FORMATTERS[self.action](url, query)]

    def _visit(self, index, url, query):
        page = self.session.navigate(url)

        if self.action == SAVE_ACTION:
            filename = build_save_filename(index, query, self.engine)
            path = write_if_absent(filename, page.html(), directory=self.output_dir)
            log_info("Saved result page.", index=index + 1, query=query, path=path)
            return []

        formatter = ROW_FORMATTERS[self.action]
        return [formatter(link_url, text) for link_url, text in page.links()]

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None
