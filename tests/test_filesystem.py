import os
import sys

import pytest

from runt.core.filesystem import EXECUTABLE_MASK, FileEntry, read_dir, stat_path

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")


def test_mask_value():
    assert EXECUTABLE_MASK == 0o110
    assert FileEntry("x", 0o750, False).is_executable
    assert not FileEntry("x", 0o707 & ~0o110, False).is_executable


def test_stat_path_directory(tmp_path):
    fi = stat_path(str(tmp_path))
    assert fi.is_dir
    assert fi.name == tmp_path.name


def test_stat_path_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        stat_path(str(tmp_path / "missing"))


@posix_only
def test_read_dir_sorted_with_modes(tmp_path):
    (tmp_path / "sub").mkdir()
    for name, mode in [("b", 0o644), ("a", 0o755)]:
        p = tmp_path / name
        p.write_text("")
        os.chmod(p, mode)
    entries = read_dir(str(tmp_path))
    assert [e.name for e in entries] == ["a", "b", "sub"]
    by_name = {e.name: e for e in entries}
    assert by_name["a"].is_executable and not by_name["a"].is_dir
    assert not by_name["b"].is_executable
    assert by_name["sub"].is_dir


@posix_only
def test_read_dir_does_not_follow_symlinks(tmp_path):
    target = tmp_path / "real"
    target.mkdir()
    (tmp_path / "link").symlink_to(target)
    by_name = {e.name: e for e in read_dir(str(tmp_path))}
    assert by_name["real"].is_dir
    assert not by_name["link"].is_dir
