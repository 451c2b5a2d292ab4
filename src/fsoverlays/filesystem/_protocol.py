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

"""Filesystem protocol and optional capabilities.

The only required operation is ``open``. Every other operation is an
optional capability expressed as its own protocol. The generic helpers in
``fsoverlays.filesystem`` (``stat``, ``read_dir``, ``read_file``, ``sub``,
``glob``) probe for these with ``isinstance`` and fall back to a traversal
built on ``open`` when a backend does not provide one.

All paths are relative, slash-separated strings; see ``valid_path``.
Implementations raise ``FileNotFoundError`` (or a subclass) for missing
entries and ``InvalidPathError`` for malformed paths.

Implementations:

- ``PrefixFilesystem``: Relocates a filesystem beneath a path prefix
- ``UnionFilesystem``: Resolves each operation across an ordered list
- ``MapFilesystem``: In-memory mapping of paths to file contents
- ``HostFilesystem``: Read-only access to a host directory
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._types import DirEntry, File, FileInfo


@runtime_checkable
class Filesystem(Protocol):
    """Read-only filesystem capability.

    Example::

        def read_config(fs: Filesystem) -> bytes:
            with fs.open("etc/app.toml") as f:
                return f.read()
    """

    def open(self, name: str) -> File:
        """Open the named file or directory.

        Raises:
            InvalidPathError: ``name`` is not well-formed.
            FileNotFoundError: ``name`` does not exist.
        """
        ...


@runtime_checkable
class StatFilesystem(Filesystem, Protocol):
    """Filesystem with a native ``stat``."""

    def stat(self, name: str) -> FileInfo:
        """Return metadata for ``name`` without opening it."""
        ...


@runtime_checkable
class ReadDirFilesystem(Filesystem, Protocol):
    """Filesystem with a native directory listing."""

    def read_dir(self, name: str) -> list[DirEntry]:
        """List the directory ``name``.

        Raises:
            FileNotFoundError: ``name`` does not exist.
            NotADirectoryError: ``name`` is a file.
        """
        ...


@runtime_checkable
class ReadFileFilesystem(Filesystem, Protocol):
    """Filesystem with a native whole-file read."""

    def read_file(self, name: str) -> bytes:
        """Return the complete contents of ``name``."""
        ...


@runtime_checkable
class SubFilesystem(Filesystem, Protocol):
    """Filesystem that can produce a view rooted at one of its directories."""

    def sub(self, dir: str) -> Filesystem:
        """Return a filesystem whose root is ``dir``."""
        ...


@runtime_checkable
class GlobFilesystem(Filesystem, Protocol):
    """Filesystem with a native glob."""

    def glob(self, pattern: str) -> list[str]:
        """Return the paths matching ``pattern``."""
        ...


@runtime_checkable
class OverlayFilesystem(
    StatFilesystem,
    ReadDirFilesystem,
    ReadFileFilesystem,
    SubFilesystem,
    GlobFilesystem,
    Protocol,
):
    """Filesystem implementing all six operations natively.

    Both overlays satisfy this protocol, so they can wrap each other.
    """


__all__ = [
    "Filesystem",
    "GlobFilesystem",
    "OverlayFilesystem",
    "ReadDirFilesystem",
    "ReadFileFilesystem",
    "StatFilesystem",
    "SubFilesystem",
]
