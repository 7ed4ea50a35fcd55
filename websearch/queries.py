import os
import sys

from .errors import ConfigError
from .settings import STDIN_SENTINEL


def read_text_source(source):
    if source == STDIN_SENTINEL:
        return sys.stdin.read()
    path = os.path.expanduser(source)
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def split_query_lines(content):
    # Blank lines (including the one left by a final newline) are dropped;
    # anything else is kept verbatim.
    queries = []
    for line in content.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line == "":
            continue
        queries.append(line)
    return queries


def resolve_queries(queries=None, queries_from=None, reader=read_text_source):
    if queries and queries_from is not None:
        raise ConfigError("Specify either queries or queries_from, not both.")

    if queries_from is not None:
        resolved = split_query_lines(reader(queries_from))
        if not resolved:
            raise ConfigError(f"No queries found in '{queries_from}'.")
        return resolved

    if queries:
        return list(queries)

    raise ConfigError("Please specify either queries or queries_from")


def decorate_query(query, prepend=None, append=None):
    return "".join([prepend or "", query, append or ""])
