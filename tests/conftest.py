"""Shared fixtures for the filecast test suite.

``fake_converter`` installs a tiny executable named ``fakeconvert`` in a
private bin directory. It copies its first argument to its last one and
records the full argument vector next to the output as JSON, which lets
tests run real subprocesses without ImageMagick. Passing ``--explode``
makes it fail with a diagnostic, like a converter rejecting an option.
"""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from filecast.processing import Processor

FAKE_CONVERTER = """#!{python}
import json
import shutil
import sys

args = sys.argv[1:]
if "--explode" in args:
    sys.stdout.write("fakeconvert: unrecognized option '--explode'\\n")
    sys.exit(3)
source, target = args[0], args[-1]
shutil.copyfile(source, target)
with open(target + ".args.json", "w") as f:
    json.dump(args, f)
"""


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    existing = os.environ.get("PYTHONPATH")
    paths = [str(repo_root)]
    if existing:
        paths.append(existing)
    os.environ["PYTHONPATH"] = os.pathsep.join(paths)


_ensure_repo_on_path()


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    path = tmp_path / "bin"
    path.mkdir()
    script = path / "fakeconvert"
    script.write_text(FAKE_CONVERTER.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_processor(work_dir: Path, bin_dir: Path) -> Processor:
    """Processor whose search path only contains ``fakeconvert``."""
    return Processor(temp_dir=work_dir, search_path=str(bin_dir))


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "input" / "report.txt"
    path.parent.mkdir()
    path.write_bytes(b"original content\n")
    return path


@pytest.fixture
def spaced_source_file(tmp_path: Path) -> Path:
    path = tmp_path / "input dir" / "annual report.txt"
    path.parent.mkdir()
    path.write_bytes(b"spaced content\n")
    return path
