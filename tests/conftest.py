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

import pytest

from fsoverlays.filesystem import MapFile, MapFilesystem


@pytest.fixture
def cd_fs() -> MapFilesystem:
    """``c/d`` containing ``data``."""
    return MapFilesystem({"c/d": MapFile(b"data")})


@pytest.fixture
def union_members() -> tuple[MapFilesystem, MapFilesystem]:
    """Two members sharing ``f1``."""
    first = MapFilesystem({"f1": MapFile(b"fs1"), "f2": MapFile(b"fs1")})
    second = MapFilesystem({"f1": MapFile(b"fs2"), "f3": MapFile(b"fs2")})
    return first, second
