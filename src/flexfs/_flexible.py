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

"""Flexible filesystem handle over a directory or an embedded bundle.

:func:`new_dir` and :func:`new_embed` build a :class:`Flexible` handle whose
queries behave identically whichever backing store sits underneath, so
application code can read assets from disk during development and from the
installed distribution in production.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import IO, TYPE_CHECKING

from ._bundle import BundleStore
from ._directory import DirectoryStore
from ._path import normalize_path
from ._protocol import BackingStore
from .errors import InvalidPatternError, PatternSource
from .logging import StructuredLogger, get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

__all__ = ["Flexible", "new_dir", "new_embed"]

logger: StructuredLogger = get_logger(__name__, context={"component": "flexible"})


def new_dir(path: str | os.PathLike[str]) -> Flexible:
    """Create a handle backed by the host directory at ``path``.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        NotADirectoryError: ``path`` is not a directory.
    """
    return Flexible(DirectoryStore(Path(path)))


def new_embed(bundle: Traversable | bytes) -> Flexible:
    """Create a handle backed by an embedded asset bundle.

    Args:
        bundle: A ``Traversable`` (``importlib.resources.files(...)``,
            ``zipfile.Path``) or the raw bytes of a zip archive.

    Raises:
        BundleError: ``bundle`` is bytes that do not form a zip archive.
    """
    if isinstance(bundle, bytes):
        return Flexible(BundleStore.from_zip(bundle))
    return Flexible(BundleStore(bundle))


def _compile(pattern: str, *, source: PatternSource, message: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as error:
        raise InvalidPatternError(message, source=source, pattern=pattern) from error


@dataclass(slots=True, frozen=True)
class Flexible:
    """Read-only query surface shared by every backing store.

    Regular expressions are matched against the base name of each entry with
    :meth:`re.Pattern.search`, so they are unanchored unless the caller adds
    ``^``/``$``. Queries that complete without a match return ``None``.
    """

    store: BackingStore

    def exists(self, path: str) -> bool:
        """Return True if ``path`` names an existing non-directory entry."""
        try:
            info = self.store.stat(normalize_path(path))
        except (FileNotFoundError, NotADirectoryError):
            # A path below a regular file cannot exist either.
            return False
        return not info.is_directory

    def open(self, path: str) -> IO[bytes]:
        """Open a file for binary reading. The caller closes the handle."""
        return self.store.open(normalize_path(path))

    def read_file(self, path: str) -> bytes:
        """Read the entire file at ``path``."""
        with self.store.open(normalize_path(path)) as f:
            return f.read()

    def find(self, directory: str, pattern: str) -> str | None:
        """Return the first file under ``directory`` whose name matches ``pattern``."""
        rx = _compile(pattern, source="pattern", message="invalid regex pattern")
        result = next(self._matches(directory, rx.search), None)

        logger.debug(
            "Find finished",
            event="flexfs.find",
            context={"dir": directory, "pattern": pattern, "found": result},
        )
        return result

    def search(
        self, directory: str, phrase: str, ignore: str = "", ext: str = ""
    ) -> str | None:
        """Return the first file whose name contains ``phrase`` and ends in ``ext``.

        ``phrase`` is spliced into a regular expression as-is. Names matching
        ``ignore`` (anywhere in the name) are skipped; an empty ``ignore``
        skips nothing. Leading dots on ``ext`` are dropped.
        """
        ext = ext.lstrip(".")
        find_pattern = f"{phrase}.*" if not ext else rf"{phrase}.*\.{ext}"
        rx_find = _compile(
            find_pattern, source="phrase+ext", message="invalid search pattern"
        )
        rx_skip = (
            _compile(f".*{ignore}.*", source="ignore", message="invalid ignore pattern")
            if ignore
            else None
        )

        def accept(name: str) -> bool:
            if rx_find.search(name) is None:
                return False
            return rx_skip is None or rx_skip.search(name) is None

        result = next(self._matches(directory, accept), None)

        logger.debug(
            "Search finished",
            event="flexfs.search",
            context={"dir": directory, "pattern": find_pattern, "found": result},
        )
        return result

    def lookup(self, directory: str, pattern: str) -> list[str] | None:
        """Return every file under ``directory`` whose name matches ``pattern``.

        Paths are listed in traversal order. ``None`` means nothing matched.
        """
        rx = _compile(pattern, source="pattern", message="invalid regex pattern")
        results = list(self._matches(directory, rx.search))

        logger.debug(
            "Lookup finished",
            event="flexfs.lookup",
            context={"dir": directory, "pattern": pattern, "hits": len(results)},
        )
        return results or None

    def fs(self) -> BackingStore:
        """Return the backing store unchanged."""
        return self.store

    def http_fs(self) -> FastAPI:
        """Return a FastAPI application serving this store read-only.

        Requires the ``http`` extra (``fastapi``).
        """
        from .http import build_http_app

        return build_http_app(self.store)

    def _matches(
        self, directory: str, accept: Callable[[str], object]
    ) -> Iterator[str]:
        """Yield normalized paths of accepted non-directory entries.

        Closing the iterator early stops the underlying walk.
        """
        for entry in self.store.walk(normalize_path(directory)):
            if not entry.is_directory and accept(entry.name):
                yield normalize_path(entry.path)
