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

"""Test-only helper utilities for flexfs."""

from .stores import (
    ASSET_FILES,
    DEEP_FILE,
    GO_FILES,
    WALK_ORDER,
    BackingStoreValidationSuite,
    build_deep_zip_bundle,
    build_zip_bundle,
    write_asset_tree,
    write_deep_tree,
)

__all__ = [
    "ASSET_FILES",
    "DEEP_FILE",
    "GO_FILES",
    "WALK_ORDER",
    "BackingStoreValidationSuite",
    "build_deep_zip_bundle",
    "build_zip_bundle",
    "write_asset_tree",
    "write_deep_tree",
]
