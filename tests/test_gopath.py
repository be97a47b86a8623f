"""Tests for import path resolution against GOROOT / GOPATH / vendor trees."""

import os
from pathlib import Path

import pytest

from gopin_core.errors import PackageNotFoundError
from gopin_core.gopath import is_local_import, resolve_import_path, split_gopath


def _pkg(root: Path, import_path: str, go_file: bool = False) -> Path:
    directory = root.joinpath(*import_path.split("/"))
    directory.mkdir(parents=True, exist_ok=True)
    if go_file:
        (directory / "x.go").write_text("package x\n", encoding="utf-8")
    return directory


def test_split_gopath_skips_empty_and_tilde():
    value = os.pathsep.join(["/a", "", "~/go", "/b"])
    assert split_gopath(value) == [Path("/a"), Path("/b")]
    assert split_gopath(None) == []


@pytest.mark.parametrize("path,expected", [
    ("./sub", True), ("../x", True), (".", True), ("..", True),
    ("github.com/a/b", False), (".hidden/pkg", False),
])
def test_is_local_import(path, expected):
    assert is_local_import(path) is expected


def test_first_gopath_entry_wins(tmp_path: Path):
    first, second = tmp_path / "gp1", tmp_path / "gp2"
    _pkg(first / "src", "github.com/foo/bar")
    _pkg(second / "src", "github.com/foo/bar")
    loc = resolve_import_path("github.com/foo/bar", tmp_path, [first, second])
    assert loc.directory == first / "src" / "github.com" / "foo" / "bar"
    assert loc.root == first / "src"
    assert not loc.goroot and not loc.vendored


def test_later_gopath_entry_used_when_earlier_lacks_package(tmp_path: Path):
    first, second = tmp_path / "gp1", tmp_path / "gp2"
    first.mkdir()
    expected = _pkg(second / "src", "github.com/foo/bar")
    assert resolve_import_path("github.com/foo/bar", tmp_path, [first, second]).directory == expected


def test_goroot_searched_before_gopath(tmp_path: Path):
    goroot, gopath = tmp_path / "goroot", tmp_path / "gopath"
    expected = _pkg(goroot / "src", "net/http")
    _pkg(gopath / "src", "net/http")
    loc = resolve_import_path("net/http", tmp_path, [gopath], goroot=goroot)
    assert loc.directory == expected
    assert loc.goroot


def test_vendor_directory_wins_inside_workspace(tmp_path: Path):
    gopath = tmp_path / "gopath"
    project = _pkg(gopath / "src", "github.com/me/app")
    vendored = _pkg(project / "vendor", "github.com/foo/bar", go_file=True)
    _pkg(gopath / "src", "github.com/foo/bar")
    loc = resolve_import_path("github.com/foo/bar", project, [gopath])
    assert loc.directory == vendored
    assert loc.vendored


def test_vendor_without_go_files_is_ignored(tmp_path: Path):
    gopath = tmp_path / "gopath"
    project = _pkg(gopath / "src", "github.com/me/app")
    _pkg(project / "vendor", "github.com/foo/bar")
    expected = _pkg(gopath / "src", "github.com/foo/bar")
    assert resolve_import_path("github.com/foo/bar", project, [gopath]).directory == expected


def test_relative_import(tmp_path: Path):
    sub = tmp_path / "sub"
    sub.mkdir()
    assert resolve_import_path("./sub", tmp_path, []).directory == sub.resolve()


def test_absolute_import_is_rejected(tmp_path: Path):
    with pytest.raises(PackageNotFoundError, match="absolute"):
        resolve_import_path(str(tmp_path), tmp_path, [tmp_path])


def test_not_found_lists_searched_dirs(tmp_path: Path):
    gopath = tmp_path / "gopath"
    with pytest.raises(PackageNotFoundError) as excinfo:
        resolve_import_path("github.com/missing/pkg", tmp_path, [gopath])
    assert excinfo.value.import_path == "github.com/missing/pkg"
    assert excinfo.value.searched == [gopath / "src" / "github.com" / "missing" / "pkg"]
