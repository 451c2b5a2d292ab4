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

"""Path validation and path arithmetic shared by the overlays.

Paths handed to a filesystem are slash-separated and relative. They never
start or end with a slash and contain no empty, ``.`` or ``..`` elements.
The root directory is spelled ``"."``.

Functions:
    valid_path: Report whether a path is well-formed
    check_path: Raise ``InvalidPathError`` for a malformed path
    trim_prefix: Strip a slash-delimited prefix from a path
    first_part: Return the first element of a path
    base_name: Return the last element of a path
    join_path: Join a directory and a relative name
"""

from __future__ import annotations

from typing import Final

from ..errors import InvalidPathError, PathNotFoundError

ROOT: Final[str] = "."
SEPARATOR: Final[str] = "/"


def valid_path(name: str) -> bool:
    """Report whether ``name`` is a well-formed filesystem path.

    Examples:
        >>> valid_path(".")
        True
        >>> valid_path("a/b")
        True
        >>> valid_path("a/../b")
        False
        >>> valid_path("")
        False
    """
    if name == ROOT:
        return True
    return all(element not in {"", ".", ".."} for element in name.split(SEPARATOR))


def check_path(name: str, *, op: str = "open") -> None:
    """Validate ``name`` before any lookup proceeds.

    Raises:
        InvalidPathError: If ``name`` is not well-formed. The error is tagged
            with ``op`` and the offending path.
    """
    if not valid_path(name):
        raise InvalidPathError(op, name)


def trim_prefix(prefix: str, name: str) -> str:
    """Strip ``prefix`` from ``name`` on a path-element boundary.

    Returns the remainder without its leading separator, or ``""`` when
    ``name`` equals ``prefix`` exactly.

    Raises:
        PathNotFoundError: If ``name`` does not start with ``prefix`` or the
            match ends in the middle of an element (``"aa"`` vs ``"aab"``).

    Examples:
        >>> trim_prefix("aa/b", "aa/b/c/d")
        'c/d'
        >>> trim_prefix("aa/b", "aa/b")
        ''
    """
    if not name.startswith(prefix):
        raise PathNotFoundError(name)
    rest = name[len(prefix) :]
    if not rest:
        return ""
    if rest[0] != SEPARATOR:
        raise PathNotFoundError(name)
    return rest[1:]


def first_part(path: str) -> str:
    """Return the first element of ``path``."""
    head, _, _ = path.partition(SEPARATOR)
    return head or path


def base_name(path: str) -> str:
    """Return the last element of ``path``, ``"."`` for an empty path."""
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return SEPARATOR if path else ROOT
    return stripped.rpartition(SEPARATOR)[2]


def join_path(directory: str, name: str) -> str:
    """Join ``directory`` and ``name``, treating ``"."`` as the empty root."""
    if directory == ROOT:
        return name
    if name == ROOT:
        return directory
    return f"{directory}{SEPARATOR}{name}"


__all__ = [
    "ROOT",
    "SEPARATOR",
    "base_name",
    "check_path",
    "first_part",
    "join_path",
    "trim_prefix",
    "valid_path",
]
