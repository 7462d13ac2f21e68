"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeHubPort: In-memory webhooks and items with a call log
- FakeRouter: Captured route registrations
- FakeErrorReporter: Captured error reports
"""

from .hub import FakeHubPort
from .reporter import FakeErrorReporter
from .router import FakeRouter

__all__ = [
    "FakeErrorReporter",
    "FakeHubPort",
    "FakeRouter",
]
