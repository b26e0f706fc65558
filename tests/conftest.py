import pytest
import pytest_asyncio

from scopedfs import DirectoryNode, MemoryHost
from scopedfs._pytest_plugin import memory_host, memory_root  # noqa: F401

PROJECT_FILES = {
    "a.ts": b"export const a = 1\n",
    "src/a.ts": b"import { a } from '../a'\n",
    "src/c.md": b"# notes\n",
    "src/lib/b.ts": b"export const b = 2\n",
}


@pytest.fixture
def project_host() -> MemoryHost:
    """Root with a.ts, src/{a.ts, c.md, lib/{b.ts}}, in that insertion order."""
    host = MemoryHost(max_quota=1 * 1024 * 1024, root_name="project")
    host.import_tree(PROJECT_FILES)
    return host


@pytest_asyncio.fixture
async def project(project_host: MemoryHost) -> DirectoryNode:
    node = await DirectoryNode.create(project_host.root, project_host.broker)
    assert node is not None
    return node
