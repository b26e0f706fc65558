import pytest
from scopedfs import FileNode


async def _texts(nodes):
    return [await n.text() for n in nodes]


@pytest.mark.asyncio
async def test_recursive_typescript_search(project):
    nodes = await project.glob("**/*.ts")
    assert all(isinstance(n, FileNode) for n in nodes)
    assert await _texts(nodes) == [
        "export const a = 1\n",
        "import { a } from '../a'\n",
        "export const b = 2\n",
    ]


@pytest.mark.asyncio
async def test_markdown_excluded(project):
    names = [n.name for n in await project.glob("**/*.ts")]
    assert "c.md" not in names


@pytest.mark.asyncio
async def test_pattern_is_relative_to_node(project):
    src = await project.directory("src")
    assert [n.name for n in await src.glob("*.ts")] == ["a.ts"]
    assert [n.name for n in await src.glob("lib/*.ts")] == ["b.ts"]


@pytest.mark.asyncio
async def test_empty_pattern(project):
    assert await project.glob("") == []


@pytest.mark.asyncio
async def test_glob_skips_denied_files(project, project_host):
    project_host.set_permission("/src/a.ts", "read", "denied")
    assert [n.name for n in await project.glob("**/*.ts")] == ["a.ts", "b.ts"]


@pytest.mark.asyncio
async def test_glob_results_are_read_mode(project):
    nodes = await project.glob("*.ts")
    assert [n.mode for n in nodes] == ["read"]
