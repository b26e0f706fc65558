"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["scopedfs._pytest_plugin"]

This makes the ``memory_host`` and ``memory_root`` fixtures available::

    async def test_something(memory_root):
        node = await memory_root.create_file("a/b.txt")
        assert await node.write("hello")
"""

import pytest
import pytest_asyncio

from ._directory import DirectoryNode
from ._memory import MemoryHost


@pytest.fixture
def memory_host() -> MemoryHost:
    """A :class:`MemoryHost` with a 1 MiB quota, one per test."""
    return MemoryHost(max_quota=1 * 1024 * 1024)


@pytest_asyncio.fixture
async def memory_root(memory_host: MemoryHost) -> DirectoryNode:
    """The root of ``memory_host`` mounted read-write."""
    node = await DirectoryNode.create(memory_host.root, memory_host.broker, "readwrite")
    assert node is not None
    return node
