"""Shared fixtures for taskman tests."""

import pytest


class RecordingSleep:
    """Async sleep replacement that records delays instead of waiting."""

    def __init__(self, events=None):
        self.delays = []
        self.events = events

    async def __call__(self, delay):
        self.delays.append(delay)
        if self.events is not None:
            self.events.append(("sleep", delay))


class FlakyOperation:
    """Async operation that raises queued errors before returning a value."""

    def __init__(self, errors, result="ok", events=None):
        self.errors = list(errors)
        self.result = result
        self.calls = 0
        self.events = events

    async def __call__(self):
        self.calls += 1
        if self.events is not None:
            self.events.append(("attempt", self.calls - 1))
        if self.errors:
            raise self.errors.pop(0)
        return self.result


@pytest.fixture
def sleeper():
    return RecordingSleep()


@pytest.fixture(autouse=True)
def clean_retry_env(monkeypatch):
    for name in (
        "TASKMAN_RETRY_MAX_RETRIES",
        "TASKMAN_RETRY_INITIAL_DELAY",
        "TASKMAN_RETRY_MAX_DELAY",
        "TASKMAN_RETRY_BACKOFF_FACTOR",
    ):
        monkeypatch.delenv(name, raising=False)
