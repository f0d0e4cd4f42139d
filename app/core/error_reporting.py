"""Error reporting capability injected into services."""

from typing import Any

import sentry_sdk
import structlog
from fastapi import Request

logger = structlog.get_logger(__name__)


class ErrorReporter:
    """Logs errors and warnings with context. Subclasses may forward them elsewhere."""

    def __init__(self, log=None):
        self.log = log or logger

    def capture_exception(self, exc: BaseException, **context: Any) -> None:
        self.log.error("error_captured", error=str(exc), error_type=type(exc).__name__, **context)

    def warning(self, event: str, **context: Any) -> None:
        self.log.warning(event, **context)


class SentryErrorReporter(ErrorReporter):
    """Forwards captured exceptions to Sentry in addition to logging them."""

    def capture_exception(self, exc: BaseException, **context: Any) -> None:
        super().capture_exception(exc, **context)
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_extra(key, str(value))
            sentry_sdk.capture_exception(exc)


class NullErrorReporter(ErrorReporter):
    """Discards everything."""

    def capture_exception(self, exc: BaseException, **context: Any) -> None:
        return None

    def warning(self, event: str, **context: Any) -> None:
        return None


def get_error_reporter(request: Request) -> ErrorReporter:
    """FastAPI dependency returning the reporter attached to the app at startup."""
    reporter = getattr(request.app.state, "error_reporter", None)
    return reporter if reporter is not None else ErrorReporter()
