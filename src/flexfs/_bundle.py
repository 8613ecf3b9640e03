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

"""Embedded asset bundle backing store.

Python's counterpart of "files compiled into the binary" is data shipped
inside the distribution and reached through :mod:`importlib.resources`. A
:class:`BundleStore` accepts any :class:`~importlib.resources.abc.Traversable`:

- ``importlib.resources.files("myapp.assets")`` for package data,
- a :class:`zipfile.Path` for an archive produced by the build, or
- a :class:`pathlib.Path`, which satisfies the protocol as well.

The bundle is opaque to flexfs; it is produced by the build and handed in.
"""

from __future__ import annotations

import errno
import io
import os
import posixpath
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import IO

from ._path import ROOT_PATH, check_within_root, is_root_path, normalize_path
from ._types import FileStat, WalkEntry
from .errors import BundleError
from .logging import StructuredLogger, get_logger

__all__ = ["BundleStore"]

logger: StructuredLogger = get_logger(__name__, context={"component": "bundle"})


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


@dataclass(slots=True, frozen=True)
class BundleStore:
    """Backing store over a pre-built, read-only asset bundle.

    Entries are located by joining the normalized path segments onto the
    bundle root. Anything the ``Traversable`` reports as neither a file nor a
    directory is treated as missing.

    Example::

        from importlib.resources import files

        store = BundleStore(files("myapp") / "assets")
        with store.open("css/site.css") as f:
            css = f.read()
    """

    bundle: Traversable

    @classmethod
    def from_zip(cls, data: bytes) -> BundleStore:
        """Build a bundle from the bytes of a zip archive.

        Raises:
            BundleError: ``data`` is not a readable zip archive.
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except zipfile.BadZipFile as error:
            raise BundleError(f"Cannot open bundle archive: {error}") from error

        logger.debug(
            "Zip bundle loaded",
            event="flexfs.bundle.zip_loaded",
            context={"entries": len(archive.namelist()), "size_bytes": len(data)},
        )
        return cls(zipfile.Path(archive))

    @classmethod
    def from_package(cls, package: str) -> BundleStore:
        """Build a bundle from the data files of an importable package."""
        return cls(resources.files(package))

    @property
    def root(self) -> Traversable:
        """The bundle root, unchanged."""
        return self.bundle

    def _resolve_path(self, path: str) -> tuple[str, Traversable]:
        """Normalize ``path`` and locate it inside the bundle.

        Raises:
            PermissionError: If the path escapes the bundle root.
            FileNotFoundError: If no entry exists at the path.
        """
        normalized = normalize_path(path) or ROOT_PATH
        check_within_root(normalized)
        if is_root_path(normalized):
            return normalized, self.bundle

        node = self.bundle.joinpath(*normalized.split("/"))
        if not (node.is_file() or node.is_dir()):
            raise _not_found(path)
        return normalized, node

    def open(self, path: str) -> IO[bytes]:
        """Open a bundled file for binary reading."""
        _, node = self._resolve_path(path)
        if node.is_dir():
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        return node.open("rb")

    def stat(self, path: str) -> FileStat:
        """Get metadata for a bundled entry."""
        normalized, node = self._resolve_path(path)
        is_dir = node.is_dir()
        size_bytes = 0
        modified_at: datetime | None = None

        if not is_dir and isinstance(node, Path):
            st = node.stat()
            size_bytes = st.st_size
            modified_at = datetime.fromtimestamp(st.st_mtime, tz=UTC)
        elif not is_dir and isinstance(node, zipfile.Path):
            size_bytes = node.root.getinfo(node.at).file_size

        return FileStat(
            path=normalized,
            name=posixpath.basename(normalized),
            is_file=not is_dir,
            is_directory=is_dir,
            size_bytes=size_bytes,
            modified_at=modified_at,
        )

    def walk(self, path: str = ROOT_PATH) -> Iterator[WalkEntry]:
        """Walk the bundled subtree rooted at ``path``."""
        normalized, node = self._resolve_path(path)
        is_dir = node.is_dir()

        yield WalkEntry(
            path=normalized,
            name=posixpath.basename(normalized),
            is_directory=is_dir,
        )
        if not is_dir:
            return

        pending = [_sorted_children(node, normalized)]
        while pending:
            step = next(pending[-1], None)
            if step is None:
                _ = pending.pop()
                continue
            child, child_path = step
            is_dir = _is_walkable_dir(child)
            yield WalkEntry(path=child_path, name=child.name, is_directory=is_dir)
            if is_dir:
                pending.append(_sorted_children(child, child_path))


def _sorted_children(
    directory: Traversable, rel_path: str
) -> Iterator[tuple[Traversable, str]]:
    children = sorted(directory.iterdir(), key=lambda node: node.name)
    return (
        (child, child.name if is_root_path(rel_path) else f"{rel_path}/{child.name}")
        for child in children
    )


def _is_walkable_dir(node: Traversable) -> bool:
    # Host-backed bundles walk like DirectoryStore: links are leaves.
    if isinstance(node, Path) and node.is_symlink():
        return False
    return node.is_dir()
