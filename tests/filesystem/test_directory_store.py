# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the host directory backing store."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from flexfs import DirectoryStore, new_dir
from tests.helpers import (
    DEEP_FILE,
    BackingStoreValidationSuite,
    write_asset_tree,
    write_deep_tree,
)


class TestDirectoryStore(BackingStoreValidationSuite):
    """Run the shared backing store checks against a host directory."""

    @pytest.fixture
    def store(self, asset_dir: Path) -> DirectoryStore:
        return DirectoryStore(asset_dir)


class TestDirectoryStoreSpecific:
    """Behaviour that only applies to host directories."""

    def test_base_is_resolved(
        self, asset_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(asset_dir.parent)
        store = DirectoryStore(Path("assets"))
        assert store.root == asset_dir.resolve()
        assert store.root.is_absolute()

    def test_missing_base(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _ = DirectoryStore(tmp_path / "missing")

    def test_base_is_a_file(self, tmp_path: Path) -> None:
        target = tmp_path / "fs.go"
        _ = target.write_text("package fs\n")
        with pytest.raises(NotADirectoryError):
            _ = DirectoryStore(target)

    def test_stat_reports_modification_time(self, asset_dir: Path) -> None:
        info = DirectoryStore(asset_dir).stat("fs.go")
        assert info.modified_at is not None
        assert info.modified_at.timestamp() == pytest.approx(
            (asset_dir / "fs.go").stat().st_mtime
        )

    def test_path_below_file(self, asset_dir: Path) -> None:
        with pytest.raises(NotADirectoryError):
            _ = DirectoryStore(asset_dir).stat("fs.go/child")

    def test_reads_live_changes(self, asset_dir: Path) -> None:
        store = DirectoryStore(asset_dir)
        _ = (asset_dir / "late.txt").write_text("added later")
        with store.open("late.txt") as f:
            assert f.read() == b"added later"

    def test_symlinked_directory_is_not_descended(self, tmp_path: Path) -> None:
        root = write_asset_tree(tmp_path / "assets")
        try:
            os.symlink(root / "views", root / "zz_link", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks are not supported here")

        entries = {e.path: e.is_directory for e in DirectoryStore(root).walk(".")}
        assert entries["zz_link"] is False
        assert "zz_link/index.html" not in entries

    def test_symlinked_file_is_readable(self, tmp_path: Path) -> None:
        root = write_asset_tree(tmp_path / "assets")
        try:
            os.symlink(root / "fs.go", root / "alias.go")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks are not supported here")

        assert DirectoryStore(root).stat("alias.go").is_file


def test_new_dir_accepts_strings(asset_dir: Path) -> None:
    fs = new_dir(str(asset_dir))
    assert isinstance(fs.fs(), DirectoryStore)
    assert fs.exists("fs.go")


def test_new_dir_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = new_dir(tmp_path / "missing")


def test_walk_handles_trees_deeper_than_recursion_limit(tmp_path: Path) -> None:
    root = write_deep_tree(tmp_path / "deep")
    fs = new_dir(root)

    assert fs.find(".", r"^deep\.txt$") == DEEP_FILE
    assert fs.read_file(DEEP_FILE) == b"bottom\n"
