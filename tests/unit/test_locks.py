import asyncio

import pytest

from esg_risk_core.lifecycle import KeyedLocks


class TestKeyedLocks:
    @pytest.mark.asyncio
    async def test_lock_is_dropped_after_release(self) -> None:
        locks: KeyedLocks[str] = KeyedLocks()

        async with locks.hold("alert-1"):
            assert "alert-1" in locks
            assert len(locks) == 1

        assert "alert-1" not in locks
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_is_dropped_when_body_raises(self) -> None:
        locks: KeyedLocks[str] = KeyedLocks()

        with pytest.raises(ValueError):
            async with locks.hold("alert-1"):
                raise ValueError("boom")

        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self) -> None:
        locks: KeyedLocks[str] = KeyedLocks()
        events: list[str] = []

        async def worker(name: str) -> None:
            async with locks.hold("alert-1"):
                events.append(f"{name}-in")
                await asyncio.sleep(0)
                events.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a-in", "a-out", "b-in", "b-out"]
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_kept_while_a_waiter_remains(self) -> None:
        locks: KeyedLocks[str] = KeyedLocks()
        release = asyncio.Event()

        async def holder() -> None:
            async with locks.hold("alert-1"):
                await release.wait()

        first = asyncio.create_task(holder())
        second = asyncio.create_task(holder())
        await asyncio.sleep(0)

        assert len(locks) == 1
        release.set()
        await first
        assert "alert-1" in locks

        await second
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block(self) -> None:
        locks: KeyedLocks[str] = KeyedLocks()

        async with locks.hold("alert-1"):
            async with locks.hold("alert-2"):
                assert len(locks) == 2
