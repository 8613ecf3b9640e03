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

"""Core filesystem types.

All types are immutable frozen dataclasses. They are produced by backing
stores and consumed by :class:`~flexfs.Flexible`:

- ``FileStat``: metadata for a single entry, returned by ``stat()``
- ``WalkEntry``: one entry yielded by a subtree ``walk()``
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class FileStat:
    """Metadata for a file or directory.

    Attributes:
        path: Normalized path relative to the store root.
        name: Base name of the entry ("." for the root).
        is_file: True if this is a regular file.
        is_directory: True if this is a directory.
        size_bytes: File size in bytes (0 for directories and for bundle
            entries whose size is unknown without reading them).
        modified_at: Last modification time, or None for bundles.

    Example::

        stat = store.stat("assets/app.css")
        if stat.is_file:
            data = store.open(stat.path).read()
    """

    path: str
    name: str
    is_file: bool
    is_directory: bool
    size_bytes: int = 0
    modified_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class WalkEntry:
    """Entry yielded by ``BackingStore.walk()``.

    Attributes:
        path: Normalized path relative to the store root (e.g. "views/a.html").
        name: Base name of the entry (e.g. "a.html"). Regex queries match
            against this value.
        is_directory: True if the entry is a directory.
    """

    path: str
    name: str
    is_directory: bool


__all__ = ["FileStat", "WalkEntry"]
