import pytest

from src.backend.app.services import retry
from src.backend.app.services.retry import retry_with_backoff


@pytest.fixture
def sleeps(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr(retry.asyncio, "sleep", fake_sleep)
    return delays


@pytest.mark.asyncio
async def test_retry_returns_after_transient_failures(sleeps):
    calls = []

    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("temporary")
        return "ok"

    assert await retry_with_backoff(flaky) == "ok"
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_reraises_last_error(sleeps):
    attempts = []

    async def always_fails():
        attempts.append(1)
        raise RuntimeError(f"attempt {len(attempts)}")

    with pytest.raises(RuntimeError, match="attempt 3"):
        await retry_with_backoff(always_fails, max_retries=3, initial_delay=0.5)
    assert sleeps == [0.5, 1.0]


@pytest.mark.asyncio
async def test_retry_first_success_does_not_sleep(sleeps):
    async def works():
        return 42

    assert await retry_with_backoff(works) == 42
    assert sleeps == []


@pytest.mark.asyncio
async def test_retry_requires_an_attempt():
    async def never_called():
        raise AssertionError("should not run")

    with pytest.raises(ValueError):
        await retry_with_backoff(never_called, max_retries=0)


@pytest.mark.asyncio
async def test_retry_reraises_the_original_exception(sleeps):
    second = ValueError("second")
    errors = [ValueError("first"), second]

    async def fails():
        raise errors.pop(0)

    with pytest.raises(ValueError) as excinfo:
        await retry_with_backoff(fails, max_retries=2)
    assert excinfo.value is second
    assert sleeps == [1.0]
