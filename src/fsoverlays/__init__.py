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

"""Composable read-only filesystem views.

See :mod:`fsoverlays.filesystem` for the protocol and the overlays, and
:mod:`fsoverlays.errors` for the exception hierarchy.
"""

from __future__ import annotations

from . import errors, filesystem, runtime
from .errors import FsOverlayError, InvalidPathError, PathNotFoundError
from .filesystem import (
    Filesystem,
    HostFilesystem,
    MapFile,
    MapFilesystem,
    PrefixFilesystem,
    UnionFilesystem,
    add_prefix,
    union,
)

__all__ = [
    "Filesystem",
    "FsOverlayError",
    "HostFilesystem",
    "InvalidPathError",
    "MapFile",
    "MapFilesystem",
    "PathNotFoundError",
    "PrefixFilesystem",
    "UnionFilesystem",
    "add_prefix",
    "errors",
    "filesystem",
    "runtime",
    "union",
]
