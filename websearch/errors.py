class WebSearchError(Exception):
    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class RunError(WebSearchError):
    """Aborts the whole run."""

    status = 400


class ConfigError(RunError):
    pass


class UnknownEngine(RunError):
    def __init__(self, engine):
        super().__init__(f"Unknown engine '{engine}'")
        self.engine = engine


class UnknownAction(RunError):
    def __init__(self, action):
        super().__init__(f"Unknown action '{action}'")
        self.action = action


class QueryError(WebSearchError):
    """Aborts processing of a single query; the run continues."""

    status = 400


class InvalidTimeKeyword(QueryError):
    def __init__(self, keyword):
        super().__init__(f"Invalid time_past value '{keyword}'")
        self.keyword = keyword


class ConflictError(QueryError):
    status = 409
