"""Fake ErrorReporterPort implementation for testing."""

from hubwatch.core.ports import ErrorReporterPort


class FakeErrorReporter(ErrorReporterPort):
    """Collects reported errors for assertions."""

    def __init__(self):
        """Initialize with empty report history."""
        self.reports: list[tuple[BaseException, str, str]] = []

    def report(self, error: BaseException, *, channel: str, stage: str) -> None:
        self.reports.append((error, channel, stage))

    @property
    def stages(self) -> list[str]:
        """Stages of every report, in order."""
        return [stage for _, _, stage in self.reports]

    def reset(self) -> None:
        """Clear collected reports."""
        self.reports.clear()
