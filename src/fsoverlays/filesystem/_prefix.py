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

"""Prefix overlay: relocate a filesystem beneath a path prefix.

Example usage::

    from fsoverlays.filesystem import MapFilesystem, MapFile, add_prefix

    assets = MapFilesystem({"logo.png": MapFile(b"...")})
    site = add_prefix(assets, "static/img")

    site.read_file("static/img/logo.png")  # b"..."
    site.read_dir("static")  # [SyntheticDir(name="img")]

Every path falls in one of three territories:

- ``"."`` and the leading elements of the prefix are answered with
  synthetic directories without touching the wrapped filesystem.
- The prefix itself and everything below it is delegated to the wrapped
  filesystem with ``prefix + "/"`` removed.
- Anything else does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from ..runtime.logging import StructuredLogger, get_logger
from ._ops import read_dir, read_file, stat, sub, walk_glob
from ._path import ROOT, base_name, check_path, trim_prefix
from ._protocol import Filesystem
from ._synthetic import PathFilesystem, SyntheticDir, SyntheticDirFile
from ._types import DirEntry, File, FileInfo

__all__ = ["PrefixFilesystem", "add_prefix"]

_logger: StructuredLogger = get_logger(__name__, context={"component": "prefix"})


@dataclass(slots=True, frozen=True)
class PrefixFilesystem:
    """Filesystem presenting ``fs`` as if it lived under ``prefix``.

    The prefix is stored as given; names are validated on every call.
    Instances are immutable: ``sub`` returns new views and never changes
    the receiver.
    """

    fs: Filesystem
    prefix: str

    @property
    def _synthetic(self) -> PathFilesystem:
        return PathFilesystem(self.prefix)

    def _strip(self, name: str) -> str:
        """Return ``name`` relative to the wrapped filesystem root."""
        return trim_prefix(self.prefix, name) or ROOT

    def open(self, name: str) -> File:
        check_path(name)
        if len(name) > len(self.prefix):
            return self.fs.open(self._strip(name))
        if name == self.prefix:
            # Boundary: a synthetic handle whose entries come from the real root.
            return SyntheticDirFile(
                SyntheticDir(base_name(name)), partial(read_dir, self.fs, ROOT)
            )
        return self._synthetic.open(name)

    def stat(self, name: str) -> FileInfo:
        check_path(name)
        if len(name) > len(self.prefix):
            return stat(self.fs, self._strip(name))
        return self._synthetic.stat(name)

    def read_dir(self, name: str) -> list[DirEntry]:
        check_path(name)
        if len(name) < len(self.prefix) or (name == ROOT != self.prefix):
            return self._synthetic.read_dir(name)
        return read_dir(self.fs, self._strip(name))

    def read_file(self, name: str) -> bytes:
        check_path(name)
        return read_file(self.fs, self._strip(name))

    def sub(self, dir: str) -> Filesystem:
        """Return the view rooted at ``dir``.

        ``""`` and ``"."`` return an equivalent view. A strict ancestor of
        the prefix narrows the prefix, the prefix itself returns the wrapped
        filesystem, and a path below it is delegated.
        """
        dir = dir or ROOT
        check_path(dir, op="sub")
        if dir == ROOT:
            return self
        if len(dir) < len(self.prefix):
            narrowed = self._synthetic.sub(dir).prefix
            _logger.debug(
                "Narrowed prefix overlay.",
                event="prefix.sub.narrowed",
                context={"prefix": self.prefix, "dir": dir, "narrowed": narrowed},
            )
            return PrefixFilesystem(self.fs, narrowed)
        rest = trim_prefix(self.prefix, dir)
        if not rest:
            return self.fs
        return sub(self.fs, rest)

    def glob(self, pattern: str) -> list[str]:
        check_path(pattern)
        return walk_glob(self, pattern)


def add_prefix(fs: Filesystem, prefix: str) -> PrefixFilesystem:
    """Present ``fs`` beneath ``prefix``.

    With prefix ``"foo"`` and a file ``bar`` in ``fs``, the returned
    filesystem exposes the file as ``foo/bar``.
    """
    return PrefixFilesystem(fs, prefix)
