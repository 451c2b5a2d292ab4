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

"""Core filesystem types.

This module defines the metadata and handle types exchanged through the
``Filesystem`` protocol:

- **Metadata**: ``FileInfo`` - immutable description of a file or directory
- **Listing**: ``DirEntry`` protocol and its ``FileInfoEntry`` adapter
- **Handles**: ``File`` and ``ReadDirFile`` protocols returned by ``open``

Mode bits follow the POSIX ``st_mode`` layout from the :mod:`stat` module,
so ``stat.S_ISDIR(info.mode)`` works for every backend.

Constants:

- ``MODE_DIR``: File-type bits for a directory (``stat.S_IFDIR``)
- ``ZERO_TIME``: Modification time reported by synthetic entries
"""

from __future__ import annotations

import stat as _stat
from dataclasses import dataclass
from datetime import UTC, datetime
from types import TracebackType
from typing import Final, Protocol, Self, runtime_checkable

MODE_DIR: Final[int] = _stat.S_IFDIR

#: Modification time reported for entries that are not backed by real files.
ZERO_TIME: Final[datetime] = datetime.min.replace(tzinfo=UTC)


@dataclass(slots=True, frozen=True)
class FileInfo:
    """Metadata for a file or directory.

    Returned by ``stat`` and ``File.stat()``.

    Attributes:
        name: Final path element of the entry.
        size: Length in bytes for regular files; backend-specific otherwise.
        mode: POSIX ``st_mode`` bits (file type and permissions).
        mod_time: Last modification time.
        is_dir: True if the entry is a directory.
        sys: Backend-specific payload, ``None`` when absent.

    Example::

        info = overlay.stat("site/index.html")
        if not info.is_dir:
            print(info.name, info.size)
    """

    name: str
    size: int = 0
    mode: int = 0
    mod_time: datetime = ZERO_TIME
    is_dir: bool = False
    sys: object | None = None

    @property
    def type(self) -> int:
        """File-type bits of :attr:`mode`."""
        return _stat.S_IFMT(self.mode)


@runtime_checkable
class DirEntry(Protocol):
    """Entry returned by a directory listing."""

    @property
    def name(self) -> str:
        """Final path element of the entry."""
        ...

    @property
    def is_dir(self) -> bool:
        """True if the entry is a directory."""
        ...

    @property
    def type(self) -> int:
        """File-type bits of the entry mode."""
        ...

    def info(self) -> FileInfo:
        """Return the full metadata for the entry."""
        ...


@dataclass(slots=True, frozen=True)
class FileInfoEntry:
    """``DirEntry`` backed by an already computed ``FileInfo``."""

    file_info: FileInfo

    @property
    def name(self) -> str:
        return self.file_info.name

    @property
    def is_dir(self) -> bool:
        return self.file_info.is_dir

    @property
    def type(self) -> int:
        return self.file_info.type

    def info(self) -> FileInfo:
        return self.file_info


@runtime_checkable
class File(Protocol):
    """Handle returned by ``Filesystem.open``.

    Handles are context managers; leaving the ``with`` block closes them.
    """

    def stat(self) -> FileInfo:
        """Return metadata for the open entry."""
        ...

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything left when ``size`` < 0.

        Returns ``b""`` at end of file.
        """
        ...

    def close(self) -> None:
        """Release the handle. Closing twice is allowed."""
        ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class ReadDirFile(File, Protocol):
    """Directory handle that can enumerate its entries."""

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        """Return up to ``n`` further entries, or all remaining when ``n`` <= 0.

        Entries are returned in directory order. Once exhausted an empty list
        is returned.
        """
        ...


__all__ = [
    "MODE_DIR",
    "ZERO_TIME",
    "DirEntry",
    "File",
    "FileInfo",
    "FileInfoEntry",
    "ReadDirFile",
]
