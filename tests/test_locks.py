"""Keyed lock tests."""

import asyncio

import pytest

from nestquarter.core.locks import KeyedLock


async def test_same_key_runs_one_at_a_time():
    locks = KeyedLock()
    events = []

    async def worker(name: str):
        async with locks.acquire("property-1"):
            events.append(f"{name}:start")
            await asyncio.sleep(0.01)
            events.append(f"{name}:end")

    await asyncio.gather(worker("a"), worker("b"))

    assert events in (
        ["a:start", "a:end", "b:start", "b:end"],
        ["b:start", "b:end", "a:start", "a:end"],
    )


async def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    inside = asyncio.Event()

    async def holder():
        async with locks.acquire("property-1"):
            await asyncio.wait_for(inside.wait(), timeout=1)

    async def other():
        async with locks.acquire("property-2"):
            inside.set()

    await asyncio.gather(holder(), other())


async def test_unused_locks_are_released():
    locks = KeyedLock()

    async with locks.acquire("property-1"):
        assert len(locks) == 1

    assert len(locks) == 0


async def test_lock_released_when_body_raises():
    locks = KeyedLock()

    with pytest.raises(RuntimeError):
        async with locks.acquire("property-1"):
            raise RuntimeError("boom")

    async with locks.acquire("property-1"):
        assert len(locks) == 1
