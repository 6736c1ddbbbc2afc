import io
import logging
import os
import sys
from pathlib import Path

import pytest

from runt.core.configuration import RuntConfig
from runt.core.driver import Driver
from runt.core.filesystem import FileEntry


def a_dir(name):
    return FileEntry(name=name, mode=0o644, is_dir=True)


def an_exec(name):
    return FileEntry(name=name, mode=0o755, is_dir=False)


def a_file(name):
    return FileEntry(name=name, mode=0o644, is_dir=False)


@pytest.fixture
def basic_tree():
    return {
        "blah": [a_file("a"), a_file("b"), a_dir("c"), a_dir("d"), an_exec("e"), an_exec("f")],
    }


@pytest.fixture
def deep_tree(basic_tree):
    tree = dict(basic_tree)
    tree["blah/c"] = [an_exec("g"), a_file("gg")]
    tree["blah/d"] = [an_exec("h"), a_file("hh")]
    return tree


@pytest.fixture
def make_driver():
    """Driver over an in-memory tree: {dir: [FileEntry, ...]}."""

    def _make(tree, *, root=None, stat_error=None, read_log=None, max_parallel=4, **kwargs):
        def stat(path):
            if stat_error is not None:
                raise stat_error
            return root if root is not None else a_dir(path)

        def read_dir(path):
            if read_log is not None:
                read_log.append(path)
            return list(tree.get(path, []))

        cfg = RuntConfig(max_parallel=max_parallel)
        return Driver(stat=stat, read_dir=read_dir, config=cfg, **kwargs)

    return _make


class FakeProcess:
    def __init__(self, stdout=b"", stderr=b"", returncode=0, on_wait=None):
        self.stdout = io.BytesIO(stdout)
        self.stderr = io.BytesIO(stderr)
        self.returncode = returncode
        self.on_wait = on_wait

    def wait(self):
        if self.on_wait is not None:
            self.on_wait()
        return self.returncode


@pytest.fixture
def fake_process():
    return FakeProcess


@pytest.fixture
def make_script(tmp_path):
    """Write a /bin/sh script under tmp_path and return its path."""
    if sys.platform == "win32":
        pytest.skip("POSIX shell scripts")

    def _make(rel, body, mode=0o755):
        p = Path(tmp_path) / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("#!/bin/sh\n" + body + "\n")
        os.chmod(p, mode)
        return p

    return _make


@pytest.fixture
def restore_root_logging():
    """Undo setup_logging() handler changes made during a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
