from pathlib import Path

import pytest

from rustgen import (
    CodegenFileError,
    File,
    FileAlreadyExistsError,
    FileGenerationError,
    Library,
    LibraryGenerationError,
)


def test_file_generate_creates_parents(tmp_path: Path) -> None:
    f = File(Path("src/model.rs"))
    f.scope.new_struct("Model").set_vis("pub")
    written = f.generate(tmp_path)
    assert written == tmp_path / "src" / "model.rs"
    assert written.read_text(encoding="utf-8") == "pub struct Model;"


def test_file_never_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "a.rs"
    target.write_text("keep me", encoding="utf-8")
    f = File("a.rs")
    f.scope.new_struct("A")
    with pytest.raises(FileAlreadyExistsError) as exc:
        f.generate(tmp_path)
    assert exc.value.path == target
    assert target.read_text(encoding="utf-8") == "keep me"


def test_file_generation_error_on_unwritable_parent(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(FileGenerationError) as exc:
        File("sub/x.rs").generate(blocker)
    assert isinstance(exc.value.__cause__, OSError)


def test_file_under_a_regular_file_is_a_generation_error(tmp_path: Path) -> None:
    (tmp_path / "blocker").write_text("", encoding="utf-8")
    with pytest.raises(FileGenerationError) as exc:
        File("blocker/x.rs").generate(tmp_path)
    assert not isinstance(exc.value, FileAlreadyExistsError)
    assert exc.value.path == tmp_path / "blocker" / "x.rs"
    assert not (tmp_path / "blocker" / "x.rs").exists()


def test_library_writes_lib_then_files(tmp_path: Path) -> None:
    lib = Library("demo", tmp_path / "demo")
    lib.lib.scope.raw("pub mod model;")
    lib.new_file("model.rs").scope.new_struct("Model").set_vis("pub")
    lib.new_file("util/mod.rs").scope.raw("pub fn id() {}")
    written = lib.generate()
    assert written == [
        tmp_path / "demo" / "lib.rs",
        tmp_path / "demo" / "model.rs",
        tmp_path / "demo" / "util" / "mod.rs",
    ]
    assert (tmp_path / "demo" / "lib.rs").read_text(encoding="utf-8") == "pub mod model;"


def test_library_rejects_duplicate_paths(tmp_path: Path) -> None:
    lib = Library("demo", tmp_path)
    lib.new_file("a.rs")
    with pytest.raises(FileAlreadyExistsError):
        lib.new_file("a.rs")
    with pytest.raises(FileAlreadyExistsError):
        lib.push_file(File("lib.rs"))


def test_library_failure_is_chained(tmp_path: Path) -> None:
    (tmp_path / "model.rs").write_text("", encoding="utf-8")
    lib = Library("demo", tmp_path)
    lib.new_file("model.rs")
    with pytest.raises(LibraryGenerationError) as exc:
        lib.generate()
    assert isinstance(exc.value.__cause__, FileAlreadyExistsError)
    assert exc.value.path == tmp_path / "model.rs"
    # lib.rs was written before the failure and is left in place
    assert (tmp_path / "lib.rs").exists()


def test_error_taxonomy() -> None:
    for cls in (FileAlreadyExistsError, FileGenerationError, LibraryGenerationError):
        assert issubclass(cls, CodegenFileError)
