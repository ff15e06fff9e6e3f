"""Tests for path containment helpers."""

from pathlib import Path

from isoblock.utils.paths import flat_name, is_contained, normalize


def test_normalize_collapses_dot_segments(tmp_path: Path) -> None:
    result = normalize(tmp_path / "a" / "." / "b" / ".." / "c.css")
    assert result == tmp_path / "a" / "c.css"


def test_normalize_makes_relative_absolute() -> None:
    assert normalize("some/file.js").is_absolute()


def test_is_contained_child(tmp_path: Path) -> None:
    assert is_contained(tmp_path, tmp_path / "assets" / "style.css")


def test_is_contained_root_itself(tmp_path: Path) -> None:
    assert is_contained(tmp_path, tmp_path)


def test_is_contained_blocks_parent_traversal(tmp_path: Path) -> None:
    assert not is_contained(tmp_path, tmp_path / ".." / ".." / "etc" / "passwd")


def test_is_contained_blocks_inner_traversal(tmp_path: Path) -> None:
    assert not is_contained(tmp_path, tmp_path / "src" / ".." / ".." / "outside.js")


def test_is_contained_rejects_sibling_with_shared_prefix(tmp_path: Path) -> None:
    root = tmp_path / "sandbox"
    assert not is_contained(root, tmp_path / "sandboxevil" / "x.js")


def test_is_contained_absolute_outside(tmp_path: Path) -> None:
    assert not is_contained(tmp_path / "sandbox", "/etc/passwd")


def test_flat_name_uses_last_segment() -> None:
    assert flat_name("../../styles/theme.css", "/src/theme.css") == "theme.css"


def test_flat_name_falls_back_to_source_name() -> None:
    assert flat_name("styles/..", "/project/styles/theme.css") == "theme.css"
    assert flat_name("", "/project/main.js") == "main.js"
