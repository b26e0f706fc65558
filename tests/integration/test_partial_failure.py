"""A subtree that fails mid-traversal is skipped; the rest is still returned."""

import logging

import pytest
from scopedfs import DirectoryNode, MemoryHost

FILES = {
    "a.ts": b"",
    "bad/x.ts": b"",
    "bad/deeper/y.ts": b"",
    "good/z.ts": b"",
}


@pytest.fixture
def host():
    host = MemoryHost()
    host.import_tree(FILES)
    return host


async def _root(host):
    node = await DirectoryNode.create(host.root, host.broker)
    assert node is not None
    return node


@pytest.mark.asyncio
async def test_glob_skips_revoked_subtree(host):
    root = await _root(host)
    host.revoke("bad")
    assert [n.name for n in await root.glob("**/*.ts")] == ["a.ts", "z.ts"]


@pytest.mark.asyncio
async def test_names_keep_failing_directory_without_children(host):
    root = await _root(host)
    host.revoke("bad")
    assert await root.names(depth=5) == ["a.ts", "bad", "good", "z.ts"]


@pytest.mark.asyncio
async def test_tree_failing_directory_has_empty_children(host):
    root = await _root(host)
    host.revoke("bad")
    tree = await root.tree(depth=5)
    bad = tree["children"][1]
    assert bad["handle"].name == "bad"
    assert bad["children"] == []


@pytest.mark.asyncio
async def test_render_failing_directory_unexpanded(host):
    root = await _root(host)
    host.revoke("bad")
    assert (await root.tree_string(depth=5)).splitlines() == [
        "root/",
        "├─ a.ts",
        "├─ bad/",
        "└─ good/",
        "   └─ z.ts",
    ]


@pytest.mark.asyncio
async def test_failing_root_gives_empty_results(host):
    root = await _root(host)
    host.revoke("/")
    assert await root.names(depth=3) == []
    assert await root.glob("**/*") == []
    assert await root.tree_string(depth=3) == "root/"


@pytest.mark.asyncio
async def test_skipped_subtree_is_logged(host, caplog):
    root = await _root(host)
    host.revoke("bad")
    with caplog.at_level(logging.DEBUG, logger="scopedfs"):
        await root.glob("**/*.ts")
    assert any("bad" in record.getMessage() for record in caplog.records)
