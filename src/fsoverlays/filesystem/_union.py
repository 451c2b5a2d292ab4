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

"""Union overlay: present an ordered list of filesystems as one.

Example usage::

    from fsoverlays.filesystem import union

    fs = union(overrides, defaults)
    fs.read_file("config.toml")  # from ``overrides`` if present there

Single-entity lookups (``open``, ``stat``, ``read_file``) stop at the first
member that does not raise ``FileNotFoundError``; a member raising any other
error stops the lookup too. Listings (``read_dir``, ``glob``) and ``sub``
consult every member and fail as a whole if any member fails, including
with ``FileNotFoundError``. Listings keep member order; an entry hides
later entries of the same name.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..errors import PathNotFoundError
from ..runtime.logging import StructuredLogger, get_logger
from ._ops import glob, read_dir, read_file, stat, sub
from ._path import ROOT, check_path
from ._protocol import Filesystem
from ._types import DirEntry, File, FileInfo

__all__ = ["UnionFilesystem", "union"]

_logger: StructuredLogger = get_logger(__name__, context={"component": "union"})


@dataclass(slots=True, frozen=True)
class UnionFilesystem:
    """Union of ``members``; earlier members hide later ones.

    If the same file exists in the first and second member, the copy in the
    second is hidden by the copy in the first, both for lookups and in
    directory listings. Listings are otherwise the concatenation of every
    member's listing, in member order.
    """

    members: tuple[Filesystem, ...]

    def _first[T](self, op: str, name: str, lookup: Callable[[Filesystem], T]) -> T:
        check_path(name)
        for index, member in enumerate(self.members):
            try:
                return lookup(member)
            except FileNotFoundError:
                _logger.debug(
                    "Union member missed; trying next.",
                    event="union.lookup.fallthrough",
                    context={"op": op, "path": name, "member": index},
                )
        _logger.debug(
            "No union member has path.",
            event="union.lookup.miss",
            context={"op": op, "path": name, "members": len(self.members)},
        )
        raise PathNotFoundError(name)

    def _every[T](
        self, op: str, name: str, lookup: Callable[[Filesystem], T]
    ) -> list[T]:
        results: list[T] = []
        for index, member in enumerate(self.members):
            try:
                results.append(lookup(member))
            except Exception:
                _logger.debug(
                    "Union member failed; aborting.",
                    event="union.listing.aborted",
                    context={"op": op, "path": name, "member": index},
                )
                raise
        return results

    def open(self, name: str) -> File:
        return self._first("open", name, lambda member: member.open(name))

    def stat(self, name: str) -> FileInfo:
        return self._first("stat", name, lambda member: stat(member, name))

    def read_file(self, name: str) -> bytes:
        return self._first("read_file", name, lambda member: read_file(member, name))

    def read_dir(self, name: str) -> list[DirEntry]:
        """Concatenate member listings in member order.

        An entry hides later entries with the same name, just as ``open``
        prefers the earlier member. Entries are not re-sorted.
        """
        check_path(name)
        listings = self._every("read_dir", name, lambda member: read_dir(member, name))
        seen: set[str] = set()
        entries: list[DirEntry] = []
        for listing in listings:
            for entry in listing:
                if entry.name not in seen:
                    seen.add(entry.name)
                    entries.append(entry)
        return entries

    def sub(self, dir: str) -> Filesystem:
        """Return the union of every member's view rooted at ``dir``.

        Unlike ``open``, a member without ``dir`` fails the whole call rather
        than dropping out of the result.
        """
        dir = dir or ROOT
        check_path(dir, op="sub")
        if dir == ROOT:
            return self
        return UnionFilesystem(
            tuple(self._every("sub", dir, lambda member: sub(member, dir)))
        )

    def glob(self, pattern: str) -> list[str]:
        check_path(pattern)
        matches = self._every("glob", pattern, lambda member: glob(member, pattern))
        # Member order is kept; a path matched twice is reported once.
        return list(dict.fromkeys(match for found in matches for match in found))


def union(*members: Filesystem) -> UnionFilesystem:
    """Return the union of ``members`` in priority order."""
    return UnionFilesystem(tuple(members))
