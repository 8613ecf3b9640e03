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

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from flexfs import Flexible, new_dir, new_embed
from tests.helpers import build_zip_bundle, write_asset_tree


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """A host directory holding the asset tree."""

    return write_asset_tree(tmp_path / "assets")


@pytest.fixture
def zip_bundle() -> bytes:
    """Bytes of a zip archive holding the asset tree."""

    return build_zip_bundle()


@pytest.fixture(params=["dir", "zip", "zip-explicit-dirs", "traversable"])
def flexible(request: pytest.FixtureRequest, tmp_path: Path) -> Flexible:
    """Return a handle over the asset tree for every kind of backing store."""

    kind: str = request.param
    if kind == "dir":
        return new_dir(write_asset_tree(tmp_path / "assets"))
    if kind == "zip":
        return new_embed(build_zip_bundle())
    if kind == "zip-explicit-dirs":
        archive = io.BytesIO(build_zip_bundle(explicit_dirs=True))
        return new_embed(zipfile.Path(archive))
    return new_embed(write_asset_tree(tmp_path / "bundle"))
