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

"""Tests for synthetic directories and the prefix-path filesystem."""

from __future__ import annotations

import pytest

from fsoverlays.errors import PathNotFoundError
from fsoverlays.filesystem import (
    MODE_DIR,
    ZERO_TIME,
    DirEntry,
    File,
    PathFilesystem,
    ReadDirFile,
    SyntheticDir,
    SyntheticDirFile,
)


class TestSyntheticDir:
    """Test SyntheticDir metadata and handle behaviour."""

    def test_info_is_fixed(self) -> None:
        info = SyntheticDir("assets").info()
        assert info.name == "assets"
        assert info.size == 0
        assert info.mode == MODE_DIR
        assert info.mod_time == ZERO_TIME
        assert info.is_dir
        assert info.sys is None
        assert info.type == MODE_DIR

    def test_stat_matches_info(self) -> None:
        entry = SyntheticDir("x")
        assert entry.stat() == entry.info()

    def test_is_dir_entry_and_file(self) -> None:
        entry = SyntheticDir("x")
        assert isinstance(entry, DirEntry)
        assert isinstance(entry, File)
        assert entry.is_dir
        assert entry.type == MODE_DIR

    def test_read_returns_empty_bytes(self) -> None:
        entry = SyntheticDir("x")
        assert entry.read() == b""
        assert entry.read(4) == b""

    def test_close_and_context_manager(self) -> None:
        with SyntheticDir("x") as entry:
            assert entry.name == "x"
        entry.close()
        assert entry.read() == b""


class TestSyntheticDirFile:
    """Test paginated listing on synthetic handles."""

    def test_without_entries_lists_nothing(self) -> None:
        handle = SyntheticDirFile(SyntheticDir("x"))
        assert isinstance(handle, ReadDirFile)
        assert handle.read_dir(-1) == []
        assert handle.read() == b""
        assert handle.stat().name == "x"

    def test_pagination(self) -> None:
        entries = [SyntheticDir(name) for name in ["a", "b", "c"]]
        handle = SyntheticDirFile(SyntheticDir("x"), lambda: entries)
        assert [e.name for e in handle.read_dir(2)] == ["a", "b"]
        assert [e.name for e in handle.read_dir(2)] == ["c"]
        assert handle.read_dir(2) == []
        assert handle.read_dir(-1) == []

    def test_entries_listed_once(self) -> None:
        calls: list[int] = []

        def list_entries() -> list[DirEntry]:
            calls.append(1)
            return [SyntheticDir("a")]

        handle = SyntheticDirFile(SyntheticDir("x"), list_entries)
        assert calls == []
        _ = handle.read_dir(1)
        _ = handle.read_dir(1)
        assert calls == [1]

    def test_close_discards_pending(self) -> None:
        handle = SyntheticDirFile(SyntheticDir("x"), lambda: [SyntheticDir("a")])
        with handle:
            pass
        assert handle.read_dir(-1) == []


class TestPathFilesystem:
    """Test the filesystem made of prefix elements alone."""

    @pytest.fixture
    def fs(self) -> PathFilesystem:
        return PathFilesystem("a/b/c")

    @pytest.mark.parametrize(
        ("name", "child"), [(".", "a"), ("a", "b"), ("a/b", "c")]
    )
    def test_read_dir_lists_next_element(
        self, fs: PathFilesystem, name: str, child: str
    ) -> None:
        assert [entry.name for entry in fs.read_dir(name)] == [child]

    def test_read_dir_at_prefix_is_empty(self, fs: PathFilesystem) -> None:
        assert fs.read_dir("a/b/c") == []

    @pytest.mark.parametrize(
        ("name", "want"), [(".", "."), ("a", "a"), ("a/b", "b"), ("a/b/c", "c")]
    )
    def test_stat_names_final_element(
        self, fs: PathFilesystem, name: str, want: str
    ) -> None:
        info = fs.stat(name)
        assert info.name == want
        assert info.is_dir

    def test_open_lists_next_element(self, fs: PathFilesystem) -> None:
        with fs.open("a") as handle:
            assert handle.stat().name == "a"
            assert [entry.name for entry in handle.read_dir(-1)] == ["b"]

    @pytest.mark.parametrize("name", ["b", "a/c", "ab", "a/b/c/d"])
    def test_other_paths_do_not_exist(self, fs: PathFilesystem, name: str) -> None:
        with pytest.raises(PathNotFoundError):
            _ = fs.stat(name)
        with pytest.raises(PathNotFoundError):
            _ = fs.read_dir(name)

    @pytest.mark.parametrize(
        ("dir", "want"), [(".", "a/b/c"), ("a", "b/c"), ("a/b", "c"), ("a/b/c", "")]
    )
    def test_sub_keeps_remaining_prefix(
        self, fs: PathFilesystem, dir: str, want: str
    ) -> None:
        assert fs.sub(dir).prefix == want
