"""Shared fixtures for diskmaid tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure (sizes in bytes)::

        root/
        ├── docs/
        │   ├── guide.md        (5)
        │   └── notes.TXT       (3)
        ├── src/
        │   ├── api/
        │   │   └── auth.py     (4)
        │   └── main.py         (4)
        ├── report.txt          (100)
        ├── report.txt.bak      (10)
        └── Makefile            (7)
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide")
    (tmp_path / "docs" / "notes.TXT").write_text("abc")
    (tmp_path / "src" / "api").mkdir(parents=True)
    (tmp_path / "src" / "api" / "auth.py").write_text("auth")
    (tmp_path / "src" / "main.py").write_text("main")
    (tmp_path / "report.txt").write_bytes(b"x" * 100)
    (tmp_path / "report.txt.bak").write_bytes(b"x" * 10)
    (tmp_path / "Makefile").write_text("all: xy")
    return tmp_path.resolve()


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Create a chain of nested directories ``l1/l2/.../l8``.

    Every directory also holds a ``f<N>.txt`` file, so ``l1/f1.txt`` is
    read at listing depth 1 and ``l1/.../l6/f6.txt`` at listing depth 6.
    """
    current = tmp_path
    for level in range(1, 9):
        current = current / f"l{level}"
        current.mkdir()
        (current / f"f{level}.txt").write_text(str(level))
    return tmp_path.resolve()


@pytest.fixture
def config_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Settings file location outside any scanned tree."""
    return tmp_path_factory.mktemp("config") / "settings.json"

