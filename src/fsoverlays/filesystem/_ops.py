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

"""Generic filesystem operations.

Each helper accepts any ``Filesystem``. When the filesystem implements the
matching optional capability the call is forwarded to it; otherwise the
operation is carried out with ``open`` alone.

Example usage::

    from fsoverlays.filesystem import read_dir, read_file

    for entry in read_dir(fs, "docs"):
        if not entry.is_dir:
            print(entry.name, len(read_file(fs, f"docs/{entry.name}")))
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from glob import escape as glob_escape
from typing import Final

from ._path import ROOT, SEPARATOR, check_path, join_path, trim_prefix
from ._protocol import (
    Filesystem,
    GlobFilesystem,
    ReadDirFilesystem,
    ReadFileFilesystem,
    StatFilesystem,
    SubFilesystem,
)
from ._types import DirEntry, File, FileInfo, ReadDirFile

_MAGIC: Final[re.Pattern[str]] = re.compile(r"[*?\[]")


def has_magic(pattern: str) -> bool:
    """Report whether ``pattern`` contains glob metacharacters."""
    return _MAGIC.search(pattern) is not None


def stat(fs: Filesystem, name: str) -> FileInfo:
    """Return metadata for ``name``."""
    if isinstance(fs, StatFilesystem):
        return fs.stat(name)
    with fs.open(name) as f:
        return f.stat()


def read_dir(fs: Filesystem, name: str) -> list[DirEntry]:
    """List directory ``name``.

    The fallback path reads every entry from the opened directory handle and
    sorts by name.

    Raises:
        NotADirectoryError: The opened handle cannot enumerate entries.
    """
    if isinstance(fs, ReadDirFilesystem):
        return fs.read_dir(name)
    with fs.open(name) as f:
        if not isinstance(f, ReadDirFile):
            msg = f"Not a directory: {name}"
            raise NotADirectoryError(msg)
        entries = f.read_dir(-1)
    entries.sort(key=lambda e: e.name)
    return entries


def read_file(fs: Filesystem, name: str) -> bytes:
    """Return the complete contents of ``name``."""
    if isinstance(fs, ReadFileFilesystem):
        return fs.read_file(name)
    with fs.open(name) as f:
        return f.read(-1)


def sub(fs: Filesystem, dir: str) -> Filesystem:
    """Return a view of ``fs`` rooted at ``dir``.

    ``"."`` returns ``fs`` itself. Filesystems without a native ``sub`` are
    wrapped in a ``SubView``.
    """
    check_path(dir, op="sub")
    if dir == ROOT:
        return fs
    if isinstance(fs, SubFilesystem):
        return fs.sub(dir)
    return SubView(fs, dir)


def glob(fs: Filesystem, pattern: str) -> list[str]:
    """Return the paths in ``fs`` matching ``pattern``."""
    if isinstance(fs, GlobFilesystem):
        return fs.glob(pattern)
    return walk_glob(fs, pattern)


def walk_glob(fs: Filesystem, pattern: str) -> list[str]:
    """Glob by walking directories with ``read_dir``.

    Each pattern element is matched against one directory level with
    ``fnmatch`` rules, so ``*`` never crosses a separator. A pattern without
    metacharacters matches when ``stat`` succeeds. Unreadable directories
    contribute no matches.
    """
    if not has_magic(pattern):
        try:
            _ = stat(fs, pattern)
        except OSError:
            return []
        return [pattern]

    directory, _, element = pattern.rpartition(SEPARATOR)
    directory = directory or ROOT
    if not has_magic(directory):
        return _glob_in(fs, directory, element)

    matches: list[str] = []
    for parent in walk_glob(fs, directory):
        matches.extend(_glob_in(fs, parent, element))
    return matches


def _glob_in(fs: Filesystem, directory: str, element: str) -> list[str]:
    try:
        entries = read_dir(fs, directory)
    except OSError:
        return []
    return [
        join_path(directory, entry.name)
        for entry in entries
        if fnmatch.fnmatchcase(entry.name, element)
    ]


@dataclass(slots=True, frozen=True)
class SubView:
    """View of ``fs`` rooted at ``dir`` for filesystems without ``sub``."""

    fs: Filesystem
    dir: str

    def _full(self, name: str) -> str:
        check_path(name)
        return join_path(self.dir, name)

    def open(self, name: str) -> File:
        return self.fs.open(self._full(name))

    def stat(self, name: str) -> FileInfo:
        return stat(self.fs, self._full(name))

    def read_dir(self, name: str) -> list[DirEntry]:
        return read_dir(self.fs, self._full(name))

    def read_file(self, name: str) -> bytes:
        return read_file(self.fs, self._full(name))

    def sub(self, dir: str) -> Filesystem:
        check_path(dir, op="sub")
        if dir == ROOT:
            return self
        return SubView(self.fs, join_path(self.dir, dir))

    def glob(self, pattern: str) -> list[str]:
        matches = glob(self.fs, join_path(glob_escape(self.dir), pattern))
        return [trim_prefix(self.dir, match) or ROOT for match in matches]


__all__ = [
    "SubView",
    "glob",
    "has_magic",
    "read_dir",
    "read_file",
    "stat",
    "sub",
    "walk_glob",
]
