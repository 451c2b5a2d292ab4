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

"""Read-only filesystem protocol, helpers and overlays.

This package provides the ``Filesystem`` protocol, its optional capability
protocols, generic helpers that work with any implementation, and two view
transformers that implement the same protocol they consume:

- ``add_prefix`` / ``PrefixFilesystem``: relocate a filesystem under a prefix
- ``union`` / ``UnionFilesystem``: resolve paths across an ordered list

Example usage::

    from fsoverlays.filesystem import MapFile, MapFilesystem, add_prefix, union

    theme = add_prefix(MapFilesystem({"base.css": MapFile(b"...")}), "css")
    site = union(MapFilesystem({"index.html": MapFile(b"<html>")}), theme)

    site.read_file("css/base.css")
    [entry.name for entry in site.read_dir(".")]  # ["index.html", "css"]

Concrete backends:

- ``MapFilesystem``: In-memory mapping of paths to ``MapFile`` records
- ``HostFilesystem``: Read-only access to a host directory
"""

from __future__ import annotations

from ._host import HostFilesystem
from ._memory import MapFile, MapFilesystem
from ._ops import SubView, glob, has_magic, read_dir, read_file, stat, sub, walk_glob
from ._path import (
    ROOT,
    base_name,
    check_path,
    first_part,
    join_path,
    trim_prefix,
    valid_path,
)
from ._prefix import PrefixFilesystem, add_prefix
from ._protocol import (
    Filesystem,
    GlobFilesystem,
    OverlayFilesystem,
    ReadDirFilesystem,
    ReadFileFilesystem,
    StatFilesystem,
    SubFilesystem,
)
from ._synthetic import PathFilesystem, SyntheticDir, SyntheticDirFile
from ._types import (
    MODE_DIR,
    ZERO_TIME,
    DirEntry,
    File,
    FileInfo,
    FileInfoEntry,
    ReadDirFile,
)
from ._union import UnionFilesystem, union

__all__ = [
    "MODE_DIR",
    "ROOT",
    "ZERO_TIME",
    "DirEntry",
    "File",
    "FileInfo",
    "FileInfoEntry",
    "Filesystem",
    "GlobFilesystem",
    "HostFilesystem",
    "MapFile",
    "MapFilesystem",
    "OverlayFilesystem",
    "PathFilesystem",
    "PrefixFilesystem",
    "ReadDirFile",
    "ReadDirFilesystem",
    "ReadFileFilesystem",
    "StatFilesystem",
    "SubFilesystem",
    "SubView",
    "SyntheticDir",
    "SyntheticDirFile",
    "UnionFilesystem",
    "add_prefix",
    "base_name",
    "check_path",
    "first_part",
    "glob",
    "has_magic",
    "join_path",
    "read_dir",
    "read_file",
    "stat",
    "sub",
    "trim_prefix",
    "union",
    "valid_path",
    "walk_glob",
]
