import os
import sys
import time

from .settings import ENV_LOG_LEVEL


FIELD_ORDER = (
    "index",
    "total",
    "query",
    "engine",
    "action",
    "url",
    "path",
    "delay",
    "status",
    "error",
)
LEVELS = {
    "TRACE": 5,
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "ERROR": 40,
}
LEVEL_COLORS = {
    "TRACE": "\x1b[90m",
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARN": "\x1b[33m",
    "ERROR": "\x1b[31m",
}
RESET_COLOR = "\x1b[0m"
DEFAULT_LEVEL = "INFO"
_LOG_HANDLER = None
_MIN_LEVEL = None


def normalize_log_value(value):
    if value is None:
        return ""
    text = str(value)
    if not text:
        return ""
    return " ".join(text.split())


def format_log_fields(fields):
    parts = []
    keys = []
    for key in FIELD_ORDER:
        if key in fields:
            keys.append(key)
    for key in sorted(fields.keys()):
        if key not in keys:
            keys.append(key)
    for key in keys:
        text = normalize_log_value(fields.get(key))
        if text == "":
            continue
        if " " in text or "=" in text:
            text = f'"{text}"'
        parts.append(f"{key}={text}")
    return " | ".join(parts)


def normalize_level(level):
    name = str(level or "").strip().upper()
    if name == "WARNING":
        name = "WARN"
    if name not in LEVELS:
        raise ValueError(f"Unknown log level '{level}'.")
    return name


def get_log_level():
    if _MIN_LEVEL:
        return _MIN_LEVEL
    env_level = os.getenv(ENV_LOG_LEVEL)
    if env_level:
        try:
            return normalize_level(env_level)
        except ValueError:
            return DEFAULT_LEVEL
    return DEFAULT_LEVEL


def set_log_level(level):
    global _MIN_LEVEL
    _MIN_LEVEL = normalize_level(level) if level else None


def is_enabled(level):
    return LEVELS[level] >= LEVELS[get_log_level()]


def colorize_level(level, stream):
    if not stream.isatty():
        return level
    if os.getenv("NO_COLOR"):
        return level
    color = LEVEL_COLORS.get(level)
    if not color:
        return level
    return f"{color}{level}{RESET_COLOR}"


def format_log_line(level, message, fields, timestamp=None):
    if timestamp is None:
        timestamp = time.strftime("%H:%M:%S")
    suffix = format_log_fields(fields)
    if suffix:
        return f"[{timestamp}] {level}: {message} | {suffix}"
    return f"[{timestamp}] {level}: {message}"


def log(level, message, **fields):
    if not is_enabled(level):
        return
    timestamp = time.strftime("%H:%M:%S")
    if _LOG_HANDLER:
        _LOG_HANDLER(format_log_line(level, message, fields, timestamp))
    # stdout carries result rows only
    stream = sys.stderr
    suffix = format_log_fields(fields)
    level_text = colorize_level(level, stream)
    if suffix:
        print(f"[{timestamp}] {level_text}: {message} | {suffix}", file=stream)
    else:
        print(f"[{timestamp}] {level_text}: {message}", file=stream)


def set_log_handler(handler):
    global _LOG_HANDLER
    _LOG_HANDLER = handler


def log_trace(message, **fields):
    log("TRACE", message, **fields)


def log_debug(message, **fields):
    log("DEBUG", message, **fields)


def log_info(message, **fields):
    log("INFO", message, **fields)


def log_warn(message, **fields):
    log("WARN", message, **fields)


def log_error(message, **fields):
    log("ERROR", message, **fields)
