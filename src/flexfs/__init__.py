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

"""Read-only filesystem abstraction over host directories and embedded bundles.

A :class:`Flexible` handle answers the same queries whether its files live in
a directory on disk or ship inside the distribution, so application code does
not need to know where its assets come from.

Example usage::

    from importlib.resources import files

    from flexfs import new_dir, new_embed

    fs = new_dir("assets") if DEBUG else new_embed(files("myapp") / "assets")

    if fs.exists("views/index.html"):
        page = fs.read_file("views/index.html")

    layout = fs.search("views", "layout", "", "html")
    partials = fs.lookup("views/partials", r"^_.*\\.html$") or []

Backing stores:

- ``DirectoryStore``: a directory on the host filesystem
- ``BundleStore``: an ``importlib.resources`` ``Traversable`` or zip archive
"""

from __future__ import annotations

from ._bundle import BundleStore
from ._directory import DirectoryStore
from ._flexible import Flexible, new_dir, new_embed
from ._path import normalize_path
from ._protocol import BackingStore, FlexibleFS
from ._types import FileStat, WalkEntry
from .errors import BundleError, FlexFSError, InvalidPatternError

__all__ = [
    "BackingStore",
    "BundleError",
    "BundleStore",
    "DirectoryStore",
    "FileStat",
    "FlexFSError",
    "Flexible",
    "FlexibleFS",
    "InvalidPatternError",
    "WalkEntry",
    "new_dir",
    "new_embed",
    "normalize_path",
]
