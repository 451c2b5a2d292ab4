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

"""Tests for the generic filesystem helpers."""

from __future__ import annotations

import pytest

from fsoverlays.errors import InvalidPathError
from fsoverlays.filesystem import (
    MapFile,
    MapFilesystem,
    SubView,
    glob,
    has_magic,
    read_dir,
    read_file,
    stat,
    sub,
    walk_glob,
)
from tests.helpers import (
    FailingFilesystem,
    OpenOnlyFilesystem,
    ReadOnlyFilesystemValidationSuite,
    walk,
)


@pytest.fixture
def tree() -> MapFilesystem:
    return MapFilesystem(
        {
            "docs/index.md": MapFile(b"# index"),
            "docs/guide/intro.md": MapFile(b"intro"),
            "docs/guide/setup.txt": MapFile(b"setup"),
            "src/main.py": MapFile(b"print()"),
            "src/[x].py": MapFile(b"bracket"),
            "README": MapFile(b"readme"),
        }
    )


@pytest.fixture
def open_only(tree: MapFilesystem) -> OpenOnlyFilesystem:
    return OpenOnlyFilesystem(tree)


class TestHasMagic:
    @pytest.mark.parametrize("pattern", ["*", "a/?", "[ab]", "a/*/b"])
    def test_magic(self, pattern: str) -> None:
        assert has_magic(pattern)

    @pytest.mark.parametrize("pattern", ["a", "a/b.txt", ".", "a-b_c"])
    def test_literal(self, pattern: str) -> None:
        assert not has_magic(pattern)


class TestFallbacks:
    """Helpers work with a filesystem that only implements ``open``."""

    def test_stat(self, open_only: OpenOnlyFilesystem) -> None:
        info = stat(open_only, "docs/index.md")
        assert info.name == "index.md"
        assert info.size == len(b"# index")
        assert open_only.opened == ["docs/index.md"]

    def test_read_file(self, open_only: OpenOnlyFilesystem) -> None:
        assert read_file(open_only, "src/main.py") == b"print()"

    def test_read_dir_is_sorted(self, open_only: OpenOnlyFilesystem) -> None:
        names = [entry.name for entry in read_dir(open_only, ".")]
        assert names == sorted(names)
        assert names == ["README", "docs", "src"]

    def test_read_dir_on_file(self, open_only: OpenOnlyFilesystem) -> None:
        with pytest.raises(NotADirectoryError):
            _ = read_dir(open_only, "README")

    def test_missing_propagates(self, open_only: OpenOnlyFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = stat(open_only, "nope")

    def test_native_capability_is_preferred(self) -> None:
        failing = FailingFilesystem(RuntimeError("native"))
        with pytest.raises(RuntimeError, match="native"):
            _ = stat(failing, "x")
        with pytest.raises(RuntimeError, match="native"):
            _ = glob(failing, "*")


class TestSub:
    def test_root_returns_same_filesystem(self, open_only: OpenOnlyFilesystem) -> None:
        assert sub(open_only, ".") is open_only

    def test_invalid_dir(self, open_only: OpenOnlyFilesystem) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            _ = sub(open_only, "docs/")
        assert exc_info.value.op == "sub"

    def test_wraps_filesystem_without_sub(
        self, open_only: OpenOnlyFilesystem
    ) -> None:
        view = sub(open_only, "docs")
        assert isinstance(view, SubView)
        assert read_file(view, "guide/intro.md") == b"intro"
        assert open_only.opened == ["docs/guide/intro.md"]

    def test_native_sub_is_used(self, tree: MapFilesystem) -> None:
        view = sub(tree, "docs/guide")
        assert sorted(walk(view)) == ["intro.md", "setup.txt"]


class TestSubViewContract(ReadOnlyFilesystemValidationSuite):
    """Run the protocol suite against a generic sub view."""

    @pytest.fixture
    def fs(self, open_only: OpenOnlyFilesystem) -> SubView:
        return SubView(open_only, "docs")

    @pytest.fixture
    def expected(self) -> list[str]:
        return ["index.md", "guide/intro.md", "guide/setup.txt"]


class TestSubView:
    @pytest.fixture
    def view(self, tree: MapFilesystem) -> SubView:
        return SubView(tree, "docs")

    def test_operations_are_relative(self, view: SubView) -> None:
        assert view.read_file("index.md") == b"# index"
        assert view.stat("guide").is_dir
        assert [e.name for e in view.read_dir("guide")] == ["intro.md", "setup.txt"]
        with view.open("guide/intro.md") as f:
            assert f.read() == b"intro"

    def test_rejects_invalid_names(self, view: SubView) -> None:
        with pytest.raises(InvalidPathError):
            _ = view.read_file("../README")

    def test_nested_sub(self, view: SubView) -> None:
        nested = view.sub("guide")
        assert isinstance(nested, SubView)
        assert nested.dir == "docs/guide"
        assert view.sub(".") is view

    def test_glob_strips_dir(self, view: SubView) -> None:
        assert view.glob("guide/*.md") == ["guide/intro.md"]
        assert view.glob("*") == ["guide", "index.md"]

    def test_glob_escapes_dir(self) -> None:
        bracket = MapFilesystem({"[x]/a": MapFile(b"a"), "x/b": MapFile(b"b")})
        assert SubView(bracket, "[x]").glob("*") == ["a"]


class TestWalkGlob:
    @pytest.mark.parametrize(
        ("pattern", "want"),
        [
            ("*", ["README", "docs", "src"]),
            ("docs/*.md", ["docs/index.md"]),
            ("docs/*/*", ["docs/guide/intro.md", "docs/guide/setup.txt"]),
            ("*/guide/*.txt", ["docs/guide/setup.txt"]),
            ("*/*.py", ["src/[x].py", "src/main.py"]),
            ("src/[[]x].py", ["src/[x].py"]),
            ("src/?ain.py", ["src/main.py"]),
            ("README", ["README"]),
            ("missing", []),
            ("missing/*", []),
            ("README/*", []),
        ],
    )
    def test_patterns(self, tree: MapFilesystem, pattern: str, want: list[str]) -> None:
        assert walk_glob(tree, pattern) == want

    def test_star_does_not_cross_separator(self, tree: MapFilesystem) -> None:
        assert "docs/guide/intro.md" not in walk_glob(tree, "docs/*")

    def test_open_only_backend(self, open_only: OpenOnlyFilesystem) -> None:
        assert glob(open_only, "docs/guide/*.md") == ["docs/guide/intro.md"]

    def test_non_os_errors_propagate(self) -> None:
        failing = FailingFilesystem(RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            _ = walk_glob(failing, "*")
