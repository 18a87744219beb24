"""Tests for diskmaid.scanner."""

import os
from pathlib import Path

import pytest

from diskmaid import ScanError
from diskmaid.filter import ExtensionFilter
from diskmaid.scanner import MAX_ENTRIES, ScanOptions, scan


def _scan_relative_paths(root: Path, **kwargs) -> set[str]:
    """Scan root and return entry paths relative to it, ``/``-separated."""
    return {
        Path(entry.path).relative_to(root).as_posix() for entry in scan(root, **kwargs)
    }


needs_non_root = pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission checks are bypassed for root",
)


class TestScanBasic:
    def test_lists_every_object(self, sample_tree: Path) -> None:
        assert _scan_relative_paths(sample_tree) == {
            "docs",
            "docs/guide.md",
            "docs/notes.TXT",
            "src",
            "src/api",
            "src/api/auth.py",
            "src/main.py",
            "report.txt",
            "report.txt.bak",
            "Makefile",
        }

    def test_paths_are_unique(self, sample_tree: Path) -> None:
        paths = [e.path for e in scan(sample_tree)]
        assert len(paths) == len(set(paths))

    def test_paths_are_absolute(self, sample_tree: Path) -> None:
        for entry in scan(sample_tree):
            assert os.path.isabs(entry.path)

    def test_relative_root_is_made_absolute(
        self, sample_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(sample_tree)
        paths = {e.path for e in scan(".")}
        assert str(sample_tree / "docs") in paths

    def test_entry_fields(self, sample_tree: Path) -> None:
        os.utime(sample_tree / "report.txt", (1_700_000_000, 1_700_000_000))
        entries = {Path(e.path).name: e for e in scan(sample_tree)}

        report = entries["report.txt"]
        assert report.is_dir is False
        assert report.size == 100
        assert report.modified == 1_700_000_000
        assert report.depth == 0

        auth = entries["auth.py"]
        assert auth.size == 4
        assert auth.depth == 2

    def test_directories_have_zero_size(self, sample_tree: Path) -> None:
        dirs = [e for e in scan(sample_tree) if e.is_dir]
        assert dirs
        assert all(e.size == 0 for e in dirs)

    def test_entry_name(self, sample_tree: Path) -> None:
        names = {e.name for e in scan(sample_tree)}
        assert "guide.md" in names
        assert "api" in names

    def test_empty_dir(self, tmp_path: Path) -> None:
        assert scan(tmp_path) == []


class TestScanWithFilter:
    def test_extension_filter_keeps_all_directories(self, sample_tree: Path) -> None:
        paths = _scan_relative_paths(sample_tree, entry_filter=ExtensionFilter("*.txt"))
        assert paths == {"docs", "docs/notes.TXT", "src", "src/api", "report.txt"}

    def test_star_keeps_files_without_extension(self, sample_tree: Path) -> None:
        paths = _scan_relative_paths(sample_tree, entry_filter=ExtensionFilter("*"))
        assert "Makefile" in paths

    def test_custom_filter_excludes(self, sample_tree: Path) -> None:
        class ExcludeMarkdown:
            def should_exclude(self, name: str, is_dir: bool) -> bool:
                return name.endswith(".md")

        paths = _scan_relative_paths(sample_tree, entry_filter=ExcludeMarkdown())
        assert "docs/guide.md" not in paths
        assert "docs" in paths


class TestScanLimits:
    def test_depth_cap(self, deep_tree: Path) -> None:
        paths = _scan_relative_paths(deep_tree)
        dirs = {p for p in paths if not p.endswith(".txt")}
        files = {Path(p).name for p in paths if p.endswith(".txt")}

        assert dirs == {"/".join(f"l{i}" for i in range(1, n + 1)) for n in range(1, 7)}
        assert files == {f"f{n}.txt" for n in range(1, 6)}

    def test_directory_at_depth_six_is_not_listed(self, deep_tree: Path) -> None:
        entries = scan(deep_tree)
        assert max(e.depth for e in entries) == 5
        assert not any(Path(e.path).name in ("l7", "f6.txt") for e in entries)

    def test_custom_depth(self, deep_tree: Path) -> None:
        paths = _scan_relative_paths(deep_tree, options=ScanOptions(max_depth=0))
        assert paths == {"l1"}

    def test_entry_cap(self, sample_tree: Path) -> None:
        entries = scan(sample_tree, options=ScanOptions(max_entries=3))
        assert len(entries) == 3

    def test_default_entry_cap(self, tmp_path: Path) -> None:
        for i in range(MAX_ENTRIES + 5):
            (tmp_path / f"{i:05d}.dat").touch()
        entries = scan(tmp_path)
        assert len(entries) == MAX_ENTRIES

    def test_truncation_is_deterministic(self, sample_tree: Path) -> None:
        first = scan(sample_tree, options=ScanOptions(max_entries=4))
        second = scan(sample_tree, options=ScanOptions(max_entries=4))
        assert [e.path for e in first] == [e.path for e in second]


class TestScanErrors:
    def test_nonexistent_root(self, tmp_path: Path) -> None:
        with pytest.raises(ScanError, match="Cannot read directory"):
            scan(tmp_path / "no_such_dir")

    def test_root_is_a_file(self, sample_tree: Path) -> None:
        with pytest.raises(ScanError):
            scan(sample_tree / "report.txt")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_broken_symlink_is_skipped(self, sample_tree: Path) -> None:
        os.symlink(sample_tree / "gone.txt", sample_tree / "dangling.txt")
        paths = _scan_relative_paths(sample_tree)
        assert "dangling.txt" not in paths
        assert "report.txt" in paths

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_root_keeps_given_path(
        self, sample_tree: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        link = tmp_path_factory.mktemp("links") / "tree"
        os.symlink(sample_tree, link)
        paths = {e.path for e in scan(link)}
        assert str(link / "report.txt") in paths
        assert str(sample_tree / "report.txt") not in paths

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_directory_is_followed(self, sample_tree: Path) -> None:
        os.symlink(sample_tree / "src", sample_tree / "link")
        paths = _scan_relative_paths(sample_tree)
        assert "link" in paths
        assert "link/main.py" in paths

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlink_loop_terminates(self, tmp_path: Path) -> None:
        os.symlink(tmp_path, tmp_path / "loop")
        entries = scan(tmp_path)
        assert 0 < len(entries) <= MAX_ENTRIES
        assert max(e.depth for e in entries) == 5

    @needs_non_root
    def test_unreadable_subdirectory_is_skipped(self, sample_tree: Path) -> None:
        locked = sample_tree / "src"
        locked.chmod(0)
        try:
            paths = _scan_relative_paths(sample_tree)
        finally:
            locked.chmod(0o755)
        assert "src" in paths
        assert "src/main.py" not in paths
        assert "docs/guide.md" in paths

    @needs_non_root
    def test_unreadable_root(self, tmp_path: Path) -> None:
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            with pytest.raises(ScanError):
                scan(locked)
        finally:
            locked.chmod(0o755)
