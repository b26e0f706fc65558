"""Property-based tests using Hypothesis."""
import asyncio

import pytest

try:
    from hypothesis import given, settings
    import hypothesis.strategies as st
    HAS_HYPOTHESIS = True
except ImportError:
    HAS_HYPOTHESIS = False

from scopedfs import DirectoryNode, MemoryHost
from scopedfs._glob import glob_files
from scopedfs._match import match_path
from scopedfs._path import normalize_path
from scopedfs._tree import build_tree, flatten_tree, to_filter_kind

pytestmark = pytest.mark.skipif(not HAS_HYPOTHESIS, reason="hypothesis not installed")

if HAS_HYPOTHESIS:
    # directories are d*, files are f*, so a path prefix can never be both
    dir_names = st.sampled_from(["da", "db", "dc"])
    file_names = st.sampled_from(["fa.ts", "fb.md", "fc.ts"])
    file_paths = st.builds(
        lambda dirs, name: "/".join([*dirs, name]),
        st.lists(dir_names, max_size=4),
        file_names,
    )
    trees = st.sets(file_paths, min_size=0, max_size=12)
    patterns = st.lists(
        st.sampled_from(["da", "d?", "d*", "*", "[ab]*"]), max_size=3
    ).flatmap(
        lambda dirs: st.sampled_from(["*.ts", "f?.md", "fa.ts", "*"]).map(
            lambda last: "/".join([*dirs, last])
        )
    )


def _host(paths):
    host = MemoryHost()
    host.import_tree({p: b"" for p in sorted(paths)})
    return host


def _depths(tree, level=1):
    for node in tree:
        yield level, node
        if node["children"] is not None:
            yield from _depths(node["children"], level + 1)


if HAS_HYPOTHESIS:

    @given(paths=trees, depth=st.integers(min_value=1, max_value=5))
    @settings(max_examples=50)
    def test_tree_never_exceeds_depth(paths, depth):
        host = _host(paths)
        tree = asyncio.run(build_tree(host.root, "all", depth))
        for level, node in _depths(tree):
            assert level <= depth
            if level == depth:
                assert node["children"] is None

    @given(paths=trees, depth=st.integers(min_value=1, max_value=5))
    @settings(max_examples=50)
    def test_dir_only_contains_no_files(paths, depth):
        host = _host(paths)
        tree = asyncio.run(build_tree(host.root, "dir", depth))
        assert all(h.kind == "directory" for h in flatten_tree(tree))

    @given(paths=trees, depth=st.integers(min_value=1, max_value=5))
    @settings(max_examples=50)
    def test_file_only_never_descends(paths, depth):
        host = _host(paths)
        tree = asyncio.run(build_tree(host.root, "file", depth))
        expected = sorted(p for p in paths if "/" not in p)
        assert sorted(h.name for h in flatten_tree(tree)) == expected
        assert all(node["children"] is None for node in tree)

    @given(paths=trees, pattern=patterns)
    @settings(max_examples=80)
    def test_glob_without_recursion_equals_brute_force(paths, pattern):
        host = _host(paths)

        async def run():
            results = []
            for handle in await glob_files(host.root, pattern):
                results.append(handle)
            return results

        found = asyncio.run(run())
        expected = {p for p in paths if match_path(pattern, p)}
        assert len(found) == len(expected)
        assert sorted(h.name for h in found) == sorted(p.rsplit("/", 1)[-1] for p in expected)

    @given(paths=trees)
    @settings(max_examples=50)
    def test_recursive_glob_finds_every_matching_file(paths):
        host = _host(paths)
        found = asyncio.run(glob_files(host.root, "**/*.ts"))
        assert len(found) == len([p for p in paths if p.endswith(".ts")])

    @given(
        paths=trees,
        files=st.booleans(),
        dirs=st.booleans(),
        depth=st.integers(min_value=1, max_value=5),
    )
    @settings(max_examples=50)
    def test_flatten_agrees_with_names(paths, files, dirs, depth):
        host = _host(paths)

        async def run():
            root = await DirectoryNode.create(host.root, host.broker)
            tree = await build_tree(host.root, to_filter_kind(files, dirs), depth)
            names = await root.names(files=files, dirs=dirs, depth=depth)
            return [h.name for h in flatten_tree(tree)], names

        flattened, names = asyncio.run(run())
        assert flattened == names

    @given(path=st.text(alphabet="/abc._-", min_size=0, max_size=30))
    @settings(max_examples=80)
    def test_normalize_path_idempotent(path):
        normalized = normalize_path(path)
        assert normalize_path(normalized) == normalized
        assert not normalized.startswith("//")
