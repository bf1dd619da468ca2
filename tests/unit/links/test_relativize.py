"""Unit tests for the path relativizer."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import allure
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from umldoclet.core.exceptions import RelativePathError
from umldoclet.links.relativize import relative_location, relative_path

segment = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789_-", min_size=1, max_size=8)
segments = st.lists(segment, min_size=0, max_size=4)


@allure.epic("umldoclet")
@allure.feature("Path Relativizer")
@pytest.mark.unit
class TestRelativePath:
    """Tests for relative_path."""

    @allure.story("Same directory")
    @allure.title("A file in the same directory has no parent segments")
    def test_same_directory(self, tmp_path: Path) -> None:
        """relativize(dirA, dirA/file.html) is file.html."""
        assert relative_path(tmp_path, tmp_path / "file.html") == "file.html"

    @allure.story("Sibling directory")
    @allure.title("A sibling directory is reached through ..")
    def test_sibling_directory(self, tmp_path: Path) -> None:
        """relativize(a/b/c, a/b/x/y.html) is ../x/y.html."""
        source = tmp_path / "a" / "b" / "c"
        source.mkdir(parents=True)
        assert relative_path(source, tmp_path / "a" / "b" / "x" / "y.html") == "../x/y.html"

    def test_from_file_uses_its_directory(self, tmp_path: Path) -> None:
        """A file as source behaves like its directory."""
        page = tmp_path / "com" / "acme" / "package-summary.html"
        page.parent.mkdir(parents=True)
        page.write_text("", encoding="utf-8")
        assert relative_path(page, tmp_path / "com" / "acme" / "package.puml") == "package.puml"

    def test_deeper_target(self, tmp_path: Path) -> None:
        """Targets below the source need no parent segments."""
        assert relative_path(tmp_path, tmp_path / "com" / "acme" / "Widget.html") == "com/acme/Widget.html"

    def test_dot_segments_canonicalized(self, tmp_path: Path) -> None:
        """Dot segments are resolved before comparing."""
        (tmp_path / "a" / "b").mkdir(parents=True)
        assert relative_path(tmp_path / "a" / "b" / "..", tmp_path / "a" / "x.html") == "x.html"

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlinks_canonicalized(self, tmp_path: Path) -> None:
        """A symlinked source is compared by its real location."""
        real = tmp_path / "real" / "docs"
        real.mkdir(parents=True)
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)
        assert relative_path(link, real / "page.html") == "page.html"

    @pytest.mark.parametrize(("source", "target"), [(None, "x"), ("x", None), (None, None)])
    def test_none_yields_no_result(self, source: str | None, target: str | None) -> None:
        """A missing endpoint yields no link."""
        assert relative_path(source, target) is None

    def test_missing_source_is_usage_error(self, tmp_path: Path) -> None:
        """A source that does not exist is rejected."""
        with pytest.raises(RelativePathError, match="Not a directory"):
            relative_path(tmp_path / "missing", tmp_path / "x.html")

    def test_usage_error_is_value_error(self, tmp_path: Path) -> None:
        """The usage error is a ValueError."""
        with pytest.raises(ValueError):
            relative_path(tmp_path / "missing", tmp_path)


@allure.epic("umldoclet")
@allure.feature("Path Relativizer")
@pytest.mark.unit
class TestRelativeLocation:
    """Tests for relative_location."""

    @allure.story("Planned locations")
    @allure.title("Locations that do not exist yet are relativized on their paths")
    def test_neither_location_exists(self, tmp_path: Path) -> None:
        """A page directory and a diagram that are not on disk still get a relative link."""
        source = tmp_path / "com" / "acme" / "ui"
        target = tmp_path / "com" / "acme" / "shapes" / "package.puml"

        assert relative_location(source, target) == "../shapes/package.puml"
        assert not (tmp_path / "com").exists()

    def test_agrees_with_checked_variant(self, tmp_path: Path) -> None:
        """For an existing directory both variants give the same link."""
        source = tmp_path / "a" / "b"
        source.mkdir(parents=True)
        target = tmp_path / "x" / "y.html"

        assert relative_location(source, target) == relative_path(source, target) == "../../x/y.html"


@allure.epic("umldoclet")
@allure.feature("Path Relativizer")
@pytest.mark.unit
class TestRelativePathProperties:
    """Property tests for relative_path."""

    @given(common=segments, source_rest=segments, target_rest=st.lists(segment, min_size=1, max_size=4))
    @settings(max_examples=100, deadline=None)
    def test_resolves_back_to_target(self, common: list[str], source_rest: list[str], target_rest: list[str]) -> None:
        """Joining the source and the result leads to the target."""
        with tempfile.TemporaryDirectory() as root:
            base = Path(root).resolve()
            source = base.joinpath(*common, *source_rest)
            source.mkdir(parents=True, exist_ok=True)
            target = base.joinpath(*common, *target_rest)

            result = relative_path(source, target)

            assert result is not None
            assert "\\" not in result
            assert (source / result).resolve() == target.resolve()

    @given(depth=st.integers(min_value=0, max_value=5), name=segment)
    @settings(max_examples=100, deadline=None)
    def test_parent_segments_match_depth(self, depth: int, name: str) -> None:
        """A target at the root of a tree needs one .. per source level."""
        with tempfile.TemporaryDirectory() as root:
            base = Path(root).resolve()
            source = base.joinpath(*(f"d{level}" for level in range(depth)))
            source.mkdir(parents=True, exist_ok=True)

            result = relative_path(source, base / f"{name}.html")

            assert result == "/".join([".."] * depth + [f"{name}.html"])
