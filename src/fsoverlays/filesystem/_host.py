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

"""Host filesystem backend.

This module provides a read-only filesystem backed by a host directory,
with path restrictions to prevent escaping the root.

Example usage::

    from fsoverlays.filesystem import HostFilesystem, add_prefix

    fs = add_prefix(HostFilesystem("/srv/www"), "static")
    fs.read_file("static/index.html")

Missing paths raise the ``FileNotFoundError`` produced by the operating
system, so host-backed members fall through in a union exactly like
in-memory ones.
"""

from __future__ import annotations

import os
import stat as _stat
from dataclasses import dataclass, field
from datetime import UTC, datetime
from io import BufferedReader
from pathlib import Path
from types import TracebackType
from typing import Self

from ..errors import PathNotFoundError
from ._path import ROOT, base_name, check_path, join_path
from ._types import DirEntry, FileInfo, FileInfoEntry

__all__ = ["HostFilesystem"]


def _file_info(name: str, st: os.stat_result) -> FileInfo:
    return FileInfo(
        name=base_name(name),
        size=st.st_size,
        mode=st.st_mode,
        mod_time=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        is_dir=_stat.S_ISDIR(st.st_mode),
        sys=st,
    )


@dataclass(slots=True)
class _HostFile:
    """Handle on an open regular file."""

    name: str
    stream: BufferedReader

    def stat(self) -> FileInfo:
        return _file_info(self.name, os.fstat(self.stream.fileno()))

    def read(self, size: int = -1) -> bytes:
        return self.stream.read(size)

    def close(self) -> None:
        self.stream.close()

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
class _HostDir:
    """Handle on a directory; entries are listed on first ``read_dir``."""

    name: str
    path: Path
    root: Path
    _pending: list[DirEntry] | None = field(default=None, init=False)

    def stat(self) -> FileInfo:
        return _file_info(self.name, self.path.stat())

    def read(self, size: int = -1) -> bytes:
        del size
        msg = f"Is a directory: {self.name}"
        raise IsADirectoryError(msg)

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        if self._pending is None:
            self._pending = _scan(self.name, self.path, self.root)
        if n <= 0:
            batch, self._pending = self._pending, []
            return batch
        batch, self._pending = self._pending[:n], self._pending[n:]
        return batch

    def close(self) -> None:
        self._pending = []

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _scan(name: str, path: Path, root: Path) -> list[DirEntry]:
    """List ``path``, leaving out links that dangle or lead outside ``root``.

    Such entries cannot be opened or stat-ed through the filesystem either.
    """
    entries: list[DirEntry] = []
    with os.scandir(path) as it:
        for item in it:
            if item.is_symlink():
                target = Path(item.path).resolve()
                if not target.exists() or not target.is_relative_to(root):
                    continue
            info = _file_info(join_path(name, item.name), item.stat())
            entries.append(FileInfoEntry(info))
    entries.sort(key=lambda e: e.name)
    return entries


@dataclass(slots=True, frozen=True)
class HostFilesystem:
    """Read-only filesystem rooted at a host directory.

    All names are validated, resolved relative to the root and rejected if
    they escape it, whether via symlinks or otherwise.
    """

    root: str

    def _resolve_path(self, name: str) -> Path:
        """Resolve a validated name to an absolute path within root.

        Raises:
            PermissionError: If resolved path escapes root directory.
        """
        root_path = Path(self.root).resolve()
        if name == ROOT:
            return root_path

        candidate = (root_path / name).resolve()
        try:
            _ = candidate.relative_to(root_path)
        except ValueError:
            msg = f"Path escapes root directory: {name}"
            raise PermissionError(msg) from None
        return candidate

    def open(self, name: str) -> _HostFile | _HostDir:
        check_path(name)
        resolved = self._resolve_path(name)
        if resolved.is_dir():
            return _HostDir(name, resolved, Path(self.root).resolve())
        return _HostFile(name, resolved.open("rb"))

    def stat(self, name: str) -> FileInfo:
        check_path(name)
        return _file_info(name, self._resolve_path(name).stat())

    def read_dir(self, name: str) -> list[DirEntry]:
        check_path(name)
        return _scan(name, self._resolve_path(name), Path(self.root).resolve())

    def read_file(self, name: str) -> bytes:
        check_path(name)
        return self._resolve_path(name).read_bytes()

    def sub(self, dir: str) -> HostFilesystem:
        check_path(dir, op="sub")
        resolved = self._resolve_path(dir)
        if not resolved.is_dir():
            if not resolved.exists():
                raise PathNotFoundError(dir)
            msg = f"Not a directory: {dir}"
            raise NotADirectoryError(msg)
        return HostFilesystem(str(resolved))
