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

"""Base exception hierarchy for :mod:`fsoverlays`."""

from __future__ import annotations

import errno


class FsOverlayError(Exception):
    """Base class for all fsoverlays exceptions.

    Subclasses also inherit from a standard exception type so callers can use
    either the library-specific class or the builtin one.

    Example:
        Catch any library error::

            try:
                data = overlay.read_file("docs/readme.md")
            except FsOverlayError as e:
                logger.error("Overlay lookup failed: %s", e)
    """


class InvalidPathError(FsOverlayError, ValueError):
    """Raised when a path is not well-formed.

    Well-formed paths are slash-separated, relative and unrooted, with no
    empty, ``.`` or ``..`` elements. The root is spelled ``"."``. Overlays
    raise this before any delegation happens, so a malformed path never
    reaches a wrapped filesystem.

    Attributes:
        op: Name of the operation that rejected the path.
        path: The offending path.

    Note:
        This exception also inherits from ``ValueError``.
    """

    def __init__(self, op: str, path: str) -> None:
        super().__init__(f"{op} {path}: invalid argument")
        self.op = op
        self.path = path


class PathNotFoundError(FsOverlayError, FileNotFoundError):
    """Raised when no filesystem layer has an entry for a path.

    Overlays recognize *any* ``FileNotFoundError`` as "not found", so errors
    raised by host or third-party backends take part in the same fallthrough
    rules as this class.

    Example:
        Handling a missing path without caring which layer reported it::

            try:
                info = overlay.stat("assets/logo.png")
            except FileNotFoundError:
                info = None
    """

    def __init__(self, path: str) -> None:
        super().__init__(errno.ENOENT, "file does not exist", path)


__all__ = [
    "FsOverlayError",
    "InvalidPathError",
    "PathNotFoundError",
]
