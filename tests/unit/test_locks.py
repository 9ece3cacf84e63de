import asyncio

from booking_api.application.locks import KeyedLocks


async def test_same_key_is_serialized():
    locks = KeyedLocks()
    order = []

    async def worker(name: str):
        async with locks.hold("ada@example.com"):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert order in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


async def test_different_keys_do_not_block():
    locks = KeyedLocks()
    entered = asyncio.Event()

    async def holder():
        async with locks.hold("first"):
            await asyncio.wait_for(entered.wait(), timeout=1)

    async def other():
        async with locks.hold("second"):
            entered.set()

    await asyncio.gather(holder(), other())


async def test_unused_entries_are_dropped():
    locks = KeyedLocks()

    async with locks.hold("ada@example.com"):
        assert len(locks) == 1

    assert len(locks) == 0
