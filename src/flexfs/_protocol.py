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

"""Protocols for backing stores and flexible filesystem handles.

A *backing store* is the source of file bytes: a live host directory
(:class:`~flexfs.DirectoryStore`) or an asset bundle shipped with the
distribution (:class:`~flexfs.BundleStore`). Both implement the
:class:`BackingStore` capability set, which is all that
:class:`~flexfs.Flexible` relies on.

The protocols use simple ``str`` paths throughout. Paths are relative to the
store root and use forward slashes; ``"."`` designates the root itself.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable

from ._types import FileStat, WalkEntry

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

    from fastapi import FastAPI


@runtime_checkable
class BackingStore(Protocol):
    """Read-only hierarchical namespace of files and directories.

    Implementations must be safe for concurrent reads and must treat their
    contents as immutable for their own lifetime.

    Implementations:

    - ``DirectoryStore``: a directory on the host filesystem
    - ``BundleStore``: a ``Traversable`` bundle (package data, zip archive)
    """

    @property
    def root(self) -> Traversable:
        """Root of the store as a ``Traversable``.

        Directory stores return a :class:`pathlib.Path`, which satisfies the
        protocol, so the value can be handed to any code consuming
        ``importlib.resources`` resources.
        """
        ...

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading.

        Args:
            path: Normalized path relative to the store root.

        Returns:
            A binary file object owned by the caller.

        Raises:
            FileNotFoundError: Path does not exist.
            IsADirectoryError: Path is a directory.
            PermissionError: Path escapes the store root or access is denied.
        """
        ...

    def stat(self, path: str) -> FileStat:
        """Return metadata for a file or directory.

        Raises:
            FileNotFoundError: Path does not exist.
            PermissionError: Path escapes the store root.
        """
        ...

    def walk(self, path: str = ".") -> Iterator[WalkEntry]:
        """Walk the subtree rooted at ``path``.

        Entries are yielded depth-first in pre-order with siblings sorted by
        name. The root of the walk is yielded first. I/O failures surface as
        exceptions from the iterator.

        Raises:
            FileNotFoundError: ``path`` does not exist.
            PermissionError: ``path`` escapes the store root.
        """
        ...


@runtime_checkable
class FlexibleFS(Protocol):
    """Uniform read-only view over a backing store.

    Every path accepted or returned is normalized. Queries that find nothing
    return ``None`` rather than raising; only invalid patterns and I/O
    failures raise.

    Example::

        def load_template(fs: FlexibleFS, name: str) -> bytes | None:
            path = fs.find("views", rf"^{re.escape(name)}\\.html$")
            return fs.read_file(path) if path is not None else None
    """

    def exists(self, path: str) -> bool:
        """Return True if ``path`` exists and is not a directory.

        Raises:
            OSError: Stat failed for a reason other than absence.
        """
        ...

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading. The caller closes it."""
        ...

    def read_file(self, path: str) -> bytes:
        """Read a whole file into memory."""
        ...

    def find(self, directory: str, pattern: str) -> str | None:
        """Return the first file under ``directory`` matching ``pattern``.

        The regular expression is tested against base names only.

        Raises:
            InvalidPatternError: ``pattern`` is not a valid regular expression.
        """
        ...

    def search(
        self, directory: str, phrase: str, ignore: str, ext: str
    ) -> str | None:
        """Return the first file whose base name contains ``phrase`` and ``ext``.

        Files whose base name matches ``ignore`` are skipped.

        Raises:
            InvalidPatternError: ``phrase``/``ext`` or ``ignore`` is invalid.
        """
        ...

    def lookup(self, directory: str, pattern: str) -> list[str] | None:
        """Return every file under ``directory`` matching ``pattern``.

        Returns ``None`` when nothing matched.

        Raises:
            InvalidPatternError: ``pattern`` is not a valid regular expression.
        """
        ...

    def fs(self) -> BackingStore:
        """Return the underlying backing store unchanged."""
        ...

    def http_fs(self) -> FastAPI:
        """Return an ASGI application serving the store over HTTP."""
        ...


__all__ = ["BackingStore", "FlexibleFS"]
