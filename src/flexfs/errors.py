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

"""Base exception hierarchy for :mod:`flexfs`.

I/O failures are not wrapped: stores raise the builtin :class:`OSError`
subclasses (``FileNotFoundError``, ``IsADirectoryError``, ``PermissionError``)
and they reach the caller unchanged.
"""

from __future__ import annotations

from typing import Literal

PatternSource = Literal["pattern", "phrase+ext", "ignore"]


class FlexFSError(Exception):
    """Base class for all flexfs exceptions.

    Allows callers to catch every library-specific exception with a single
    handler while standard I/O errors propagate normally.

    Example:
        Distinguishing bad input from a failing store::

            try:
                path = fs.find("views", user_pattern)
            except FlexFSError as e:
                return render_error(f"Bad query: {e}")
    """


class InvalidPatternError(FlexFSError, ValueError):
    """Raised when a query's regular expression fails to compile.

    The pattern is rejected before the backing store is touched, so no walk
    has happened when this is raised.

    Attributes:
        source: Which query input produced the bad expression: ``"pattern"``
            for ``find``/``lookup``, ``"phrase+ext"`` or ``"ignore"`` for
            ``search``.
        pattern: The expression handed to :func:`re.compile`.

    Note:
        This exception also inherits from ``ValueError``.
    """

    def __init__(self, message: str, *, source: PatternSource, pattern: str) -> None:
        super().__init__(message)
        self.source: PatternSource = source
        self.pattern = pattern


class BundleError(FlexFSError, OSError):
    """Raised when an embedded bundle cannot be read as a filesystem.

    Typical causes are a corrupt zip archive or a package without data files.
    Inherits from ``OSError`` so it travels with the other I/O failures.
    """


__all__ = [
    "BundleError",
    "FlexFSError",
    "InvalidPatternError",
    "PatternSource",
]
