import random
import time
from dataclasses import dataclass, field
from functools import partial
from typing import List, Optional

from .actions import ActionDispatcher, validate_action
from .browser import AutomationSession, open_browser
from .engines import build_url, escape_query, validate_engine
from .errors import ConfigError, QueryError
from .logging_utils import log_error, log_info, log_trace
from .queries import decorate_query, read_text_source, resolve_queries
from .results import ItemResult, MultiStatus, RunResult
from .settings import DEFAULT_ACTION, DEFAULT_ENGINE, DEFAULT_WEB_TIMEOUT_S
from .timefilter import NO_TIME_FILTER, TimeFilter, encode_time_filter


@dataclass(frozen=True)
class RunConfig:
    queries: List[str] = field(default_factory=list)
    queries_from: Optional[str] = None
    prepend: Optional[str] = None
    append: Optional[str] = None
    delay: Optional[float] = None
    min_delay: Optional[float] = None
    max_delay: Optional[float] = None
    num: Optional[int] = None
    time_filter: TimeFilter = NO_TIME_FILTER
    engine: str = DEFAULT_ENGINE
    action: str = DEFAULT_ACTION
    headless: bool = False
    web_timeout_s: int = DEFAULT_WEB_TIMEOUT_S

    def validate(self):
        if self.queries and self.queries_from is not None:
            raise ConfigError("Specify either queries or queries_from, not both.")
        if self.delay is not None and (
            self.min_delay is not None or self.max_delay is not None
        ):
            raise ConfigError("Specify either delay or min_delay/max_delay, not both.")
        if (self.min_delay is None) != (self.max_delay is None):
            raise ConfigError("min_delay and max_delay must be specified together.")
        for name in ("delay", "min_delay", "max_delay"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigError(f"{name} must be >= 0.")
        if self.min_delay is not None and self.min_delay > self.max_delay:
            raise ConfigError("min_delay must be <= max_delay.")
        if self.num is not None and self.num < 1:
            raise ConfigError("num must be a positive integer.")
        if self.time_filter.start and self.time_filter.start > self.time_filter.end:
            raise ConfigError("time_start must be <= time_end.")
        validate_engine(self.engine)
        validate_action(self.action)
        return self


def pick_delay(config, rng=random):
    if config.delay:
        return config.delay
    if config.min_delay is not None and config.max_delay is not None:
        return rng.uniform(config.min_delay, config.max_delay)
    return 0


def wait_between_queries(config, sleep=time.sleep, rng=random):
    delay = pick_delay(config, rng=rng)
    if not delay:
        return
    if config.delay:
        log_trace("Sleeping before next query.", delay=f"{delay}s")
    else:
        log_trace(
            "Sleeping a random delay before next query.",
            delay=f"{delay:.2f}s",
            min_delay=config.min_delay,
            max_delay=config.max_delay,
        )
    sleep(delay)


def build_query_url(config, raw_query):
    query = decorate_query(raw_query, config.prepend, config.append)
    time_param = encode_time_filter(config.time_filter)
    url = build_url(config.engine, escape_query(query), time_param, config.num)
    return query, url


def run_search(
    config,
    launcher=open_browser,
    session_factory=None,
    reader=read_text_source,
    sleep=time.sleep,
    rng=random,
    dispatcher=None,
):
    config.validate()
    queries = resolve_queries(config.queries, config.queries_from, reader=reader)

    owns_dispatcher = dispatcher is None
    if owns_dispatcher:
        if session_factory is None:
            session_factory = partial(
                AutomationSession,
                headless=config.headless,
                web_timeout_s=config.web_timeout_s,
            )

        dispatcher = ActionDispatcher(
            config.action,
            config.engine,
            launcher=launcher,
            session_factory=session_factory,
        )

    result = RunResult(action=config.action)
    if dispatcher.is_open_action:
        result.envelope = MultiStatus()

    total = len(queries)
    log_trace(
        "Start processing queries.",
        total=total,
        engine=config.engine,
        action=config.action,
    )
    try:
        for index, raw_query in enumerate(queries):
            if index > 0:
                wait_between_queries(config, sleep=sleep, rng=rng)

            try:
                query, url = build_query_url(config, raw_query)
            except QueryError as exc:
                log_error(
                    exc.message,
                    index=index + 1,
                    total=total,
                    query=raw_query,
                    status=exc.status,
                )
                if result.envelope is not None:
                    result.envelope.add_result(exc.status, exc.message, index)
                else:
                    result.errors.append(ItemResult(exc.status, exc.message, index))
                continue

            outcome = dispatcher.dispatch(index, url, query)
            if result.envelope is not None:
                status, message = outcome
                result.envelope.add_result(status, message, index)
            else:
                result.rows.extend(outcome)
    finally:
        if owns_dispatcher:
            dispatcher.close()

    if result.envelope is not None:
        log_info(
            "Opened queries in browser.",
            total=total,
            status=result.envelope.status,
        )
    return result
