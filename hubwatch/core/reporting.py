"""Default error reporting policy: log and continue."""

import logging

from .ports import ErrorReporterPort

logger = logging.getLogger(__name__)


class LoggingErrorReporter(ErrorReporterPort):
    """Logs recovered errors with channel and stage context."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def report(self, error: BaseException, *, channel: str, stage: str) -> None:
        self.log.error(
            f"Error during {stage} for channel {channel}: {error}",
            exc_info=error,
            extra={"channel": channel, "stage": stage},
        )
