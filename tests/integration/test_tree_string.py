import pytest
from scopedfs import DirectoryNode, MemoryHost


async def _root(files, dirs=()):
    host = MemoryHost(root_name="root")
    for d in dirs:
        host.makedirs(d)
    host.import_tree(files)
    node = await DirectoryNode.create(host.root, host.broker)
    assert node is not None
    return node


@pytest.mark.asyncio
async def test_two_level_tree():
    root = await _root({"a.txt": b"", "sub/b.txt": b""})
    assert await root.tree_string(depth=2) == "root/\n├─ a.txt\n└─ sub/\n   └─ b.txt"


@pytest.mark.asyncio
async def test_project_tree(project):
    assert (await project.tree_string(depth=3)).splitlines() == [
        "project/",
        "├─ a.ts",
        "└─ src/",
        "   ├─ a.ts",
        "   ├─ c.md",
        "   └─ lib/",
        "      └─ b.ts",
    ]


@pytest.mark.asyncio
async def test_nested_continuations():
    root = await _root(
        {"a/b/c.txt": b"", "a/d.txt": b"", "e.txt": b""},
    )
    assert (await root.tree_string(depth=3)).splitlines() == [
        "root/",
        "├─ a/",
        "│  ├─ b/",
        "│  │  └─ c.txt",
        "│  └─ d.txt",
        "└─ e.txt",
    ]


@pytest.mark.asyncio
async def test_ceiling_directory_shown_unexpanded(project):
    assert (await project.tree_string()).splitlines() == ["project/", "├─ a.ts", "└─ src/"]


@pytest.mark.asyncio
async def test_none_filter_is_root_only(project):
    assert await project.tree_string(files=False, dirs=False, depth=5) == "project/"


@pytest.mark.asyncio
async def test_dirs_only_prunes(project):
    assert (await project.tree_string(files=False, depth=5)).splitlines() == [
        "project/",
        "└─ src/",
        "   └─ lib/",
    ]


@pytest.mark.asyncio
async def test_files_only_hides_nested_files(project):
    assert (await project.tree_string(dirs=False, depth=5)).splitlines() == [
        "project/",
        "└─ a.ts",
    ]


@pytest.mark.asyncio
async def test_empty_subdirectory():
    root = await _root({"z.txt": b""}, dirs=["empty"])
    assert (await root.tree_string(depth=2)).splitlines() == [
        "root/",
        "├─ empty/",
        "└─ z.txt",
    ]
