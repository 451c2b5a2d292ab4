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

"""In-memory filesystem backend.

This module provides ``MapFilesystem``, a read-only filesystem built from a
mapping of paths to ``MapFile`` records. It is suitable for tests and for
small fixture trees wrapped by the overlays.

Example usage::

    from fsoverlays.filesystem import MapFile, MapFilesystem

    fs = MapFilesystem({"docs/index.md": MapFile(b"# Hello")})
    fs.read_file("docs/index.md")  # b"# Hello"
    fs.stat("docs").is_dir  # True, parents are implied

Parent directories of every entry exist implicitly. A ``MapFile`` whose mode
has the directory bit set declares an explicit (possibly empty) directory.
"""

from __future__ import annotations

import stat as _stat
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType, TracebackType
from typing import Self

from ..errors import PathNotFoundError
from ._ops import SubView
from ._path import ROOT, SEPARATOR, base_name, check_path, join_path
from ._types import MODE_DIR, ZERO_TIME, DirEntry, FileInfo, FileInfoEntry

__all__ = ["MapFile", "MapFilesystem"]


# ---------------------------------------------------------------------------
# Internal Types
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class MapFile:
    """Contents and metadata of one entry in a ``MapFilesystem``."""

    data: bytes = b""
    mode: int = 0
    mod_time: datetime = ZERO_TIME
    sys: object | None = None

    @property
    def is_dir(self) -> bool:
        return _stat.S_ISDIR(self.mode)


@dataclass(slots=True)
class _OpenMapFile:
    """Read handle on a regular file."""

    path: str
    file_info: FileInfo
    data: bytes
    offset: int = 0
    closed: bool = False

    def stat(self) -> FileInfo:
        return self.file_info

    def read(self, size: int = -1) -> bytes:
        if self.closed:
            msg = f"I/O operation on closed file: {self.path}"
            raise ValueError(msg)
        end = len(self.data) if size < 0 else min(self.offset + size, len(self.data))
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@dataclass(slots=True)
class _MapDir:
    """Handle on a directory; entries are handed out in name order."""

    path: str
    file_info: FileInfo
    entries: list[DirEntry] = field(default_factory=list)

    def stat(self) -> FileInfo:
        return self.file_info

    def read(self, size: int = -1) -> bytes:
        del size
        msg = f"Is a directory: {self.path}"
        raise IsADirectoryError(msg)

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        if n <= 0:
            batch, self.entries = self.entries, []
            return batch
        batch, self.entries = self.entries[:n], self.entries[n:]
        return batch

    def close(self) -> None:
        self.entries = []

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# ---------------------------------------------------------------------------
# MapFilesystem Implementation
# ---------------------------------------------------------------------------


class MapFilesystem:
    """Read-only filesystem backed by a ``{path: MapFile}`` mapping.

    Implements ``open``, ``stat``, ``read_dir``, ``read_file`` and ``sub``.
    Globbing goes through the generic walker. ``sub`` is strict: the target
    must be an existing directory.
    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, MapFile] | None = None) -> None:
        self._files: Mapping[str, MapFile] = MappingProxyType(dict(files or {}))

    @property
    def files(self) -> Mapping[str, MapFile]:
        """Read-only view of the backing mapping."""
        return self._files

    def __repr__(self) -> str:
        return f"MapFilesystem({sorted(self._files)!r})"

    def _info(self, name: str) -> FileInfo:
        entry = self._files.get(name)
        if entry is not None:
            return FileInfo(
                name=base_name(name),
                size=len(entry.data),
                mode=entry.mode,
                mod_time=entry.mod_time,
                is_dir=entry.is_dir,
                sys=entry.sys,
            )
        if self._is_implied_dir(name):
            return FileInfo(name=base_name(name), mode=MODE_DIR | 0o555, is_dir=True)
        raise PathNotFoundError(name)

    def _is_implied_dir(self, name: str) -> bool:
        if name == ROOT:
            return True
        prefix = name + SEPARATOR
        return any(path.startswith(prefix) for path in self._files)

    def _children(self, name: str) -> list[DirEntry]:
        prefix = "" if name == ROOT else name + SEPARATOR
        names: set[str] = set()
        for path in self._files:
            if path.startswith(prefix) and len(path) > len(prefix):
                names.add(path[len(prefix) :].split(SEPARATOR, 1)[0])
        return [
            FileInfoEntry(self._info(join_path(name, child))) for child in sorted(names)
        ]

    def open(self, name: str) -> _OpenMapFile | _MapDir:
        check_path(name)
        info = self._info(name)
        if not info.is_dir:
            return _OpenMapFile(name, info, self._files[name].data)
        return _MapDir(name, info, self._children(name))

    def stat(self, name: str) -> FileInfo:
        check_path(name)
        return self._info(name)

    def read_dir(self, name: str) -> list[DirEntry]:
        check_path(name)
        if not self._info(name).is_dir:
            msg = f"Not a directory: {name}"
            raise NotADirectoryError(msg)
        return self._children(name)

    def read_file(self, name: str) -> bytes:
        check_path(name)
        if self._info(name).is_dir:
            msg = f"Is a directory: {name}"
            raise IsADirectoryError(msg)
        return self._files[name].data

    def sub(self, dir: str) -> MapFilesystem | SubView:
        check_path(dir, op="sub")
        if dir == ROOT:
            return self
        if not self._info(dir).is_dir:
            msg = f"Not a directory: {dir}"
            raise NotADirectoryError(msg)
        return SubView(self, dir)
