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

"""Shared path normalization utilities.

Every path handed to a backing store, and every path returned to callers,
goes through :func:`normalize_path` first. The normalized form uses forward
slashes as separators and never contains ``.`` segments or repeated
separators.

Functions:
    normalize_path: Join and clean path fragments into the canonical form
    is_root_path: Whether a normalized path designates the store root
    check_within_root: Reject normalized paths that escape the store root
"""

from __future__ import annotations

import os
from typing import Final

ROOT_PATH: Final[str] = "."


def normalize_path(*parts: str) -> str:
    """Join path fragments and clean the result.

    Empty fragments are skipped. The remaining fragments are joined with the
    platform separator, ``.`` segments and redundant separators are collapsed,
    ``..`` segments are resolved lexically, and the platform separator is
    converted to ``/``.

    Args:
        *parts: Path fragments to join.

    Returns:
        The normalized path, or an empty string when no fragment was given.

    Examples:
        >>> normalize_path("./assets//css/")
        'assets/css'
        >>> normalize_path("assets", "../views", "index.html")
        'views/index.html'
        >>> normalize_path(".")
        '.'
        >>> normalize_path()
        ''
    """
    fragments = [part for part in parts if part]
    if not fragments:
        return ""

    cleaned = os.path.normpath(os.sep.join(fragments)).replace(os.sep, "/")
    # POSIX keeps a leading double slash; collapse it like any other run.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def is_root_path(path: str) -> bool:
    """Return True when ``path`` designates the root of a store."""
    return path in {"", ROOT_PATH}


def check_within_root(path: str) -> None:
    """Validate that a normalized path stays inside the store root.

    Args:
        path: A path already passed through :func:`normalize_path`.

    Raises:
        PermissionError: If the path is absolute or climbs above the root.
    """
    if path.startswith("/") or path == ".." or path.startswith("../"):
        msg = f"Path escapes root directory: {path}"
        raise PermissionError(msg)


__all__ = [
    "ROOT_PATH",
    "check_within_root",
    "is_root_path",
    "normalize_path",
]
