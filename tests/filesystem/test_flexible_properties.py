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

"""Property-based tests relating the Flexible queries to each other."""

from __future__ import annotations

import posixpath
import re

from hypothesis import given, settings, strategies as st

from flexfs import Flexible, new_embed
from tests.helpers import ASSET_FILES, WALK_ORDER, build_zip_bundle

_HANDLE: Flexible = new_embed(build_zip_bundle())

_DIRECTORIES = st.sampled_from(
    [".", "", "static", "static/js", "./views/", "views/partials", "fs.go"]
)
_PATTERNS = st.sampled_from(
    [
        ".*",
        r"\.go$",
        r"\.html$",
        "^app",
        "_",
        "min",
        "^fs",
        "s",
        r"\.rs$",
        "^$",
        "[a-f]{2}",
    ]
)


def _under(path: str, directory: str) -> bool:
    base = posixpath.normpath(directory or ".")
    return base == "." or path == base or path.startswith(base + "/")


@given(_DIRECTORIES, _PATTERNS)
@settings(max_examples=150)
def test_find_is_absent_or_first_lookup_result(directory: str, pattern: str) -> None:
    found = _HANDLE.find(directory, pattern)
    results = _HANDLE.lookup(directory, pattern)
    if found is None:
        assert results is None
    else:
        assert results is not None
        assert found == results[0]


@given(_DIRECTORIES, _PATTERNS)
@settings(max_examples=150)
def test_lookup_results_are_matching_files_under_directory(
    directory: str, pattern: str
) -> None:
    rx = re.compile(pattern)
    for path in _HANDLE.lookup(directory, pattern) or []:
        assert path in ASSET_FILES
        assert rx.search(posixpath.basename(path))
        assert _under(path, directory)


@given(_DIRECTORIES)
@settings(max_examples=50)
def test_find_everything_never_returns_none(directory: str) -> None:
    assert _HANDLE.find(directory, ".*") is not None


@given(st.sampled_from(WALK_ORDER))
@settings(max_examples=50)
def test_exists_iff_path_is_a_file(path: str) -> None:
    assert _HANDLE.exists(path) is (path in ASSET_FILES)
