"""Traversals tolerate concurrent mutation of the host (read skew, no errors)."""

import asyncio
import threading

import pytest
from scopedfs import DirectoryNode, MemoryHost


@pytest.mark.asyncio
async def test_traversal_while_another_thread_writes():
    host = MemoryHost(max_quota=64 * 1024 * 1024)
    host.import_tree({f"seed/{i}.ts": b"" for i in range(20)})
    root = await DirectoryNode.create(host.root, host.broker)
    stop = threading.Event()
    errors: list[Exception] = []

    def writer() -> None:
        i = 0
        try:
            while not stop.is_set() and i < 2000:
                host.import_tree({f"d{i % 7}/sub{i % 3}/f{i}.ts": b"x"})
                i += 1
        except Exception as exc:
            errors.append(exc)

    thread = threading.Thread(target=writer, daemon=True)
    thread.start()
    try:
        for _ in range(50):
            found = await root.glob("**/*.ts")
            assert len(found) >= 20
            names = await root.names(depth=3)
            assert "seed" in names
            await asyncio.sleep(0)
    finally:
        stop.set()
        thread.join(timeout=5.0)
    assert not errors


@pytest.mark.asyncio
async def test_concurrent_independent_traversals():
    host = MemoryHost()
    host.import_tree({f"d{i}/f{j}.ts": b"" for i in range(5) for j in range(5)})
    root = await DirectoryNode.create(host.root, host.broker)
    results = await asyncio.gather(*(root.glob("**/*.ts") for _ in range(10)))
    assert all(len(r) == 25 for r in results)
    assert len({tuple(n.name for n in r) for r in results}) == 1
