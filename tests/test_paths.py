"""Tests for trill.build.paths — pure path algebra."""

import posixpath

import pytest

from trill.build.paths import (
    containment,
    is_within,
    relativize,
    resolve,
    swap_extension,
    to_posix,
)


class TestResolve:
    def test_absolute_passes_through(self) -> None:
        assert resolve("/site/pages", "/lib/counter.tsx", sep="/") == "/lib/counter.tsx"

    def test_relative_is_joined_and_normalized(self) -> None:
        assert resolve("/site/pages/blog", "../components/x.tsx", sep="/") == "/site/pages/components/x.tsx"

    def test_dot_segments_collapse(self) -> None:
        assert resolve("/site", "./a/./b/../c", sep="/") == "/site/a/c"

    def test_trailing_separator_on_base_is_ignored(self) -> None:
        assert resolve("/site/", "a", sep="/") == "/site/a"

    def test_windows_separator(self) -> None:
        assert resolve("C:\\site\\pages", "..\\lib\\x.tsx", sep="\\") == "C:\\site\\lib\\x.tsx"


class TestRelativize:
    def test_identical_paths(self) -> None:
        assert relativize("/a/b", "/a/b", sep="/") == "."

    def test_descendant(self) -> None:
        assert relativize("/site", "/site/components/x.tsx", sep="/") == "components/x.tsx"

    def test_sibling_subtree(self) -> None:
        assert relativize("/site/pages/blog", "/site/components/x.tsx", sep="/") == "../../components/x.tsx"

    def test_ancestor(self) -> None:
        assert relativize("/a/b/c", "/a", sep="/") == "../.."

    def test_trailing_and_duplicate_separators_are_ignored(self) -> None:
        assert relativize("/a//b/", "/a/b/c/", sep="/") == "c"

    def test_relative_inputs(self) -> None:
        assert relativize("assets", "components/x.tsx", sep="/") == "../components/x.tsx"

    def test_windows_separator(self) -> None:
        assert relativize("C:\\site", "C:\\site\\pages\\x", sep="\\") == "pages\\x"

    @pytest.mark.parametrize(
        ("base", "target"),
        [
            ("/site", "/site/pages/page.trl"),
            ("/site/pages/blog", "/site/components/counter.tsx"),
            ("/a/b/c", "/x/y"),
            ("/a/b", "/a/b"),
            ("/", "/srv/www"),
        ],
    )
    def test_resolve_of_relativize_round_trips(self, base: str, target: str) -> None:
        rel = relativize(base, target, sep="/")
        resolved = resolve(base, rel, sep="/")
        assert resolved == posixpath.normpath(target)
        assert relativize(base, resolved, sep="/") == rel


class TestContainment:
    def test_equal_paths_yield_none(self) -> None:
        assert containment("/site", "/site", sep="/") is None

    def test_equal_paths_with_trailing_separator_yield_none(self) -> None:
        assert containment("/site/", "/site", sep="/") is None

    def test_descendant_returns_exact_suffix(self) -> None:
        assert containment("/site", "/site/.out", sep="/") == ".out"
        assert containment("/site", "/site/build/out", sep="/") == "build/out"

    def test_prefix_sibling_is_not_contained(self) -> None:
        assert containment("/site/out", "/site/output", sep="/") is None

    def test_unrelated_path(self) -> None:
        assert containment("/site", "/other/.out", sep="/") is None

    def test_parent_is_not_contained_in_child(self) -> None:
        assert containment("/site/.out", "/site", sep="/") is None

    def test_filesystem_root(self) -> None:
        assert containment("/", "/srv", sep="/") == "srv"


class TestHelpers:
    def test_is_within(self) -> None:
        assert is_within(".out", ".out", sep="/")
        assert is_within(".out/pages/page.py", ".out", sep="/")
        assert not is_within(".outer/page.trl", ".out", sep="/")

    def test_swap_extension(self) -> None:
        assert swap_extension("pages/page.trl", ".trl", ".py") == "pages/page.py"

    def test_swap_extension_rejects_other_suffix(self) -> None:
        with pytest.raises(ValueError, match="does not end with"):
            swap_extension("pages/page.html", ".trl", ".py")

    def test_to_posix(self) -> None:
        assert to_posix("pages\\blog\\x.tsx", sep="\\") == "pages/blog/x.tsx"
        assert to_posix("pages/blog", sep="/") == "pages/blog"
