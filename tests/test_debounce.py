import asyncio

import pytest

from placepicker.core.debounce import DebounceToken, Debouncer


def _recorder():
    calls = []

    async def f(x):
        calls.append(x)
        return x.upper()

    return f, calls


@pytest.mark.asyncio
async def test_burst_collapses_to_last_argument():
    f, calls = _recorder()
    debounced = Debouncer(f, delay_s=0.5)

    first = asyncio.create_task(debounced("a"))
    await asyncio.sleep(0.1)
    second = asyncio.create_task(debounced("b"))
    await asyncio.sleep(0.1)
    third = asyncio.create_task(debounced("c"))

    assert await asyncio.gather(first, second, third) == [None, None, "C"]
    assert calls == ["c"]


@pytest.mark.asyncio
async def test_single_call_passes_through_once():
    f, calls = _recorder()
    debounced = Debouncer(f, delay_s=0.05)

    assert await debounced("amsterdam") == "AMSTERDAM"
    assert calls == ["amsterdam"]
    assert not debounced.pending


@pytest.mark.asyncio
async def test_calls_after_quiet_period_each_run():
    f, calls = _recorder()
    debounced = Debouncer(f, delay_s=0.02)

    assert await debounced("a") == "A"
    assert await debounced("b") == "B"
    assert calls == ["a", "b"]


@pytest.mark.asyncio
async def test_cancel_resolves_pending_call_to_none():
    f, calls = _recorder()
    debounced = Debouncer(f, delay_s=0.2)

    task = asyncio.create_task(debounced("x"))
    await asyncio.sleep(0)
    assert debounced.pending
    debounced.cancel()

    assert await task is None
    assert calls == []
    assert not debounced.pending


@pytest.mark.asyncio
async def test_token_cancel_is_idempotent():
    token = DebounceToken(10)
    token.cancel()
    token.cancel()
    assert token.is_cancelled
    assert await token.wait() is False


@pytest.mark.asyncio
async def test_token_cancel_after_firing_is_a_no_op():
    token = DebounceToken(0.01)
    assert await token.wait() is True
    token.cancel()
    assert token.is_completed
    assert not token.is_cancelled
