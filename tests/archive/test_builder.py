import io
import zipfile

import pytest

from treezip.archive.builder import ArchiveBuilder, ArchiveEntry
from treezip.errors import SerializationError


def test_add_file_and_serialize(read_zip):
    builder = ArchiveBuilder()
    builder.add_file("index.html", "A", False)

    files = read_zip(builder.serialize())

    assert files == {"index.html": b"A"}


def test_folder_scopes_prefix_paths(read_zip):
    builder = ArchiveBuilder()
    css = builder.add_folder("css")
    css.add_file("style.css", "B", False)
    css.add_folder("vendor").add_file("lib.css", "C", False)

    files = read_zip(builder.serialize())

    assert list(files) == ["css/style.css", "css/vendor/lib.css"]


def test_no_directory_entries_are_written():
    builder = ArchiveBuilder()
    builder.add_folder("empty")
    builder.add_folder("css").add_file("style.css", "B", False)

    with zipfile.ZipFile(io.BytesIO(builder.serialize())) as zf:
        assert zf.namelist() == ["css/style.css"]


def test_duplicate_path_last_write_wins_and_keeps_position(read_zip):
    builder = ArchiveBuilder()
    builder.add_file("a.txt", "first", False)
    builder.add_file("b.txt", "b", False)
    builder.add_folder("sub")
    builder.add_file("a.txt", "second", False)

    files = read_zip(builder.serialize())

    assert list(files) == ["a.txt", "b.txt"]
    assert files["a.txt"] == b"second"


def test_binary_string_stored_one_byte_per_char(read_zip):
    builder = ArchiveBuilder()
    builder.add_file("logo.png", "\x89PNG", True)

    assert read_zip(builder.serialize())["logo.png"] == b"\x89PNG"


def test_text_stored_as_utf8(read_zip):
    builder = ArchiveBuilder()
    builder.add_file("index.html", "café", False)

    assert read_zip(builder.serialize())["index.html"] == "café".encode("utf-8")


def test_entries_are_compressed():
    builder = ArchiveBuilder()
    builder.add_file("index.html", "A" * 1000, False)

    with zipfile.ZipFile(io.BytesIO(builder.serialize())) as zf:
        info = zf.getinfo("index.html")
        assert info.compress_type == zipfile.ZIP_DEFLATED
        assert info.compress_size < info.file_size


def test_entries_shared_with_scopes():
    builder = ArchiveBuilder()
    scope = builder.add_folder("css")
    scope.add_file("style.css", "B", False)

    assert builder.entries == [ArchiveEntry("css/style.css", "B", False)]
    assert scope.entries == builder.entries


def test_entry_size_uses_stored_bytes():
    assert ArchiveEntry("a.txt", "é", False).size == 2
    assert ArchiveEntry("a.bin", "é", True).size == 1


def test_serialize_twice_raises():
    builder = ArchiveBuilder()
    builder.serialize()

    with pytest.raises(SerializationError):
        builder.serialize()


def test_serialize_failure_is_wrapped(mocker):
    mocker.patch(
        "treezip.archive.builder.zipfile.ZipFile", side_effect=OSError("disk full")
    )
    builder = ArchiveBuilder()
    builder.add_file("a.txt", "x", False)

    with pytest.raises(SerializationError, match="disk full"):
        builder.serialize()
