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

"""Host directory backing store.

This module provides a backing store rooted at a directory on the host
filesystem. It is the development-time counterpart of
:class:`~flexfs.BundleStore`: assets are read live from disk, so edits show up
without rebuilding anything.

Example usage::

    from flexfs import DirectoryStore

    store = DirectoryStore("assets")
    for entry in store.walk("views"):
        print(entry.path)
"""

from __future__ import annotations

import os
import posixpath
import stat as stat_module
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import IO

from ._path import ROOT_PATH, check_within_root, is_root_path, normalize_path
from ._types import FileStat, WalkEntry
from .logging import StructuredLogger, get_logger

__all__ = ["DirectoryStore"]

logger: StructuredLogger = get_logger(__name__, context={"component": "directory"})


@dataclass(slots=True, frozen=True)
class DirectoryStore:
    """Backing store reading from a directory on the host filesystem.

    The base directory is resolved to an absolute path once, at construction.
    All paths are interpreted relative to it; normalized paths that are
    absolute or climb above it are rejected with ``PermissionError``.

    Symbolic links are followed by ``open`` and ``stat``. During a walk a
    link to a directory is reported as a non-directory entry and is not
    descended into, which keeps walks finite on cyclic trees.
    """

    base: Path

    def __post_init__(self) -> None:
        resolved = Path(self.base).resolve()
        if not resolved.exists():
            raise FileNotFoundError(f"Directory does not exist: {self.base}")
        if not resolved.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.base}")
        object.__setattr__(self, "base", resolved)
        logger.debug(
            "Directory store opened",
            event="flexfs.directory.opened",
            context={"base": str(resolved)},
        )

    @property
    def root(self) -> Path:
        """Absolute path of the base directory."""
        return self.base

    def _resolve_path(self, path: str) -> tuple[str, Path]:
        """Normalize ``path`` and map it onto the host filesystem.

        Raises:
            PermissionError: If the path escapes the base directory.
        """
        normalized = normalize_path(path) or ROOT_PATH
        check_within_root(normalized)
        if is_root_path(normalized):
            return normalized, self.base
        return normalized, self.base / normalized

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading."""
        _, resolved = self._resolve_path(path)
        if resolved.is_dir():
            raise IsADirectoryError(f"Is a directory: {path}")
        return resolved.open("rb")

    def stat(self, path: str) -> FileStat:
        """Get metadata for a path."""
        normalized, resolved = self._resolve_path(path)
        st = resolved.stat()
        is_dir = stat_module.S_ISDIR(st.st_mode)

        return FileStat(
            path=normalized,
            name=posixpath.basename(normalized),
            is_file=not is_dir,
            is_directory=is_dir,
            size_bytes=0 if is_dir else st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        )

    def walk(self, path: str = ROOT_PATH) -> Iterator[WalkEntry]:
        """Walk the subtree rooted at ``path`` in lexical depth-first order."""
        normalized, resolved = self._resolve_path(path)
        is_dir = stat_module.S_ISDIR(resolved.stat().st_mode)

        yield WalkEntry(
            path=normalized,
            name=posixpath.basename(normalized),
            is_directory=is_dir,
        )
        if not is_dir:
            return

        # One iterator of sorted children per open directory, deepest last.
        pending = [_sorted_children(resolved, normalized)]
        while pending:
            step = next(pending[-1], None)
            if step is None:
                _ = pending.pop()
                continue
            child, child_path = step
            is_dir = child.is_dir(follow_symlinks=False)
            yield WalkEntry(path=child_path, name=child.name, is_directory=is_dir)
            if is_dir:
                pending.append(_sorted_children(Path(child.path), child_path))


def _sorted_children(
    directory: Path, rel_path: str
) -> Iterator[tuple[os.DirEntry[str], str]]:
    with os.scandir(directory) as it:
        children = sorted(it, key=lambda entry: entry.name)
    return (
        (child, child.name if is_root_path(rel_path) else f"{rel_path}/{child.name}")
        for child in children
    )
