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

"""Synthetic directories for paths that exist only as a prefix.

A prefix overlay answers queries above its real boundary with directories
that no backend stores. ``SyntheticDir`` is such a directory: it has size 0,
a directory-only mode, ``ZERO_TIME`` as modification time and no ``sys``
payload, and reading it returns ``b""`` without error.

``PathFilesystem`` is the degenerate filesystem made of nothing but the
elements of one prefix path.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from types import TracebackType
from typing import Self

from ._path import ROOT, base_name, first_part, trim_prefix
from ._types import MODE_DIR, ZERO_TIME, DirEntry, FileInfo


@dataclass(slots=True, frozen=True)
class SyntheticDir:
    """Directory entry, and closed-over file handle, with fixed metadata."""

    name: str

    @property
    def is_dir(self) -> bool:
        return True

    @property
    def type(self) -> int:
        return MODE_DIR

    def info(self) -> FileInfo:
        return FileInfo(
            name=self.name,
            size=0,
            mode=MODE_DIR,
            mod_time=ZERO_TIME,
            is_dir=True,
            sys=None,
        )

    def stat(self) -> FileInfo:
        return self.info()

    def read(self, size: int = -1) -> bytes:
        del size
        return b""

    def close(self) -> None:
        return None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _no_entries() -> list[DirEntry]:
    return []


@dataclass(slots=True)
class SyntheticDirFile:
    """Open handle on a synthetic directory.

    ``list_entries`` is called once, on the first ``read_dir``. Entries are
    then handed out in order until exhausted.
    """

    entry: SyntheticDir
    list_entries: Callable[[], Sequence[DirEntry]] = _no_entries
    _pending: list[DirEntry] | None = field(default=None, init=False)

    def stat(self) -> FileInfo:
        return self.entry.info()

    def read(self, size: int = -1) -> bytes:
        return self.entry.read(size)

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        if self._pending is None:
            self._pending = list(self.list_entries())
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


@dataclass(slots=True, frozen=True)
class PathFilesystem:
    """Filesystem whose only entries are the directories along ``prefix``.

    A name resolves when it is ``"."`` or a leading run of whole elements of
    the prefix; anything else raises ``PathNotFoundError``. Callers validate
    names before asking.
    """

    prefix: str

    def _remainder(self, name: str) -> str:
        # Part of the prefix below ``name``; "" when ``name`` is the prefix.
        if name == ROOT:
            return self.prefix
        return trim_prefix(name, self.prefix)

    # open and stat name the entry after the last element of ``name`` so that
    # they agree with the listing of its parent; only read_dir looks ahead to
    # the next prefix element.
    def open(self, name: str) -> SyntheticDirFile:
        entries = self.read_dir(name)
        return SyntheticDirFile(SyntheticDir(base_name(name)), lambda: entries)

    def stat(self, name: str) -> FileInfo:
        _ = self._remainder(name)
        return SyntheticDir(base_name(name)).info()

    def read_dir(self, name: str) -> list[DirEntry]:
        rest = self._remainder(name)
        if not rest:
            # The prefix itself; its children live in the real filesystem.
            return []
        return [SyntheticDir(first_part(rest))]

    def sub(self, dir: str) -> PathFilesystem:
        return PathFilesystem(self._remainder(dir))


__all__ = [
    "PathFilesystem",
    "SyntheticDir",
    "SyntheticDirFile",
]
