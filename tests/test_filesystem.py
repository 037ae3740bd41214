"""Tests for Suitcase filesystem adapters."""

import pytest

from suitcase.filesystem import Filesystem, LocalFilesystem, MemoryFilesystem
from suitcase.models import FileEntry


@pytest.fixture(params=["local", "memory"])
def filesystem(request, tmp_path):
    """Each adapter, empty."""
    if request.param == "local":
        return LocalFilesystem(tmp_path)
    return MemoryFilesystem()


class TestFilesystemContract:
    """Behaviour every adapter shares."""

    def test_satisfies_protocol(self, filesystem):
        """Test that the adapter implements the Filesystem protocol."""
        assert isinstance(filesystem, Filesystem)

    def test_write_then_read(self, filesystem):
        """Test writing a file and reading it back."""
        assert filesystem.has("users/alice.json") is False

        assert filesystem.write("users/alice.json", b"{}") is True

        assert filesystem.has("users/alice.json") is True
        assert filesystem.read("users/alice.json") == b"{}"

    def test_write_existing_file(self, filesystem):
        """Test that write refuses to overwrite."""
        filesystem.write("users/alice.json", b"{}")

        with pytest.raises(FileExistsError):
            filesystem.write("users/alice.json", b"[]")

        assert filesystem.read("users/alice.json") == b"{}"

    def test_update(self, filesystem):
        """Test replacing the content of a file."""
        filesystem.write("users/alice.json", b"{}")

        assert filesystem.update("users/alice.json", b"[]") is True
        assert filesystem.read("users/alice.json") == b"[]"

    def test_update_missing_file(self, filesystem):
        """Test that update requires an existing file."""
        with pytest.raises(FileNotFoundError):
            filesystem.update("users/alice.json", b"[]")

        assert filesystem.has("users/alice.json") is False

    def test_read_missing_file(self, filesystem):
        """Test reading a file that does not exist."""
        with pytest.raises(FileNotFoundError):
            filesystem.read("users/alice.json")

    def test_delete(self, filesystem):
        """Test deleting a file."""
        filesystem.write("users/alice.json", b"{}")

        assert filesystem.delete("users/alice.json") is True
        assert filesystem.has("users/alice.json") is False

        with pytest.raises(FileNotFoundError):
            filesystem.delete("users/alice.json")

    def test_list_contents(self, filesystem):
        """Test listing the files directly inside a directory."""
        filesystem.write("users/bob.json", b"{}")
        filesystem.write("users/alice.json", b"{}")
        filesystem.write("users/nested/carol.json", b"{}")
        filesystem.write("groups/admins.json", b"{}")

        listed = filesystem.list_contents("users")

        assert listed == [
            FileEntry(path="users/alice.json", filename="alice", extension="json"),
            FileEntry(path="users/bob.json", filename="bob", extension="json"),
        ]

    def test_list_missing_directory(self, filesystem):
        """Test that a missing directory lists as empty."""
        assert filesystem.list_contents("nothing") == []

    def test_delete_dir(self, filesystem):
        """Test deleting a directory with its files."""
        filesystem.write("users/alice.json", b"{}")
        filesystem.write("users/nested/carol.json", b"{}")
        filesystem.write("groups/admins.json", b"{}")

        assert filesystem.delete_dir("users") is True

        assert filesystem.list_contents("users") == []
        assert filesystem.has("users/nested/carol.json") is False
        assert filesystem.has("groups/admins.json") is True

    def test_delete_missing_dir(self, filesystem):
        """Test deleting a directory that does not exist."""
        assert filesystem.delete_dir("nothing") is False


class TestLocalFilesystem:
    """Local disk specifics."""

    def test_files_live_under_root(self, tmp_path):
        """Test that paths resolve under the root directory."""
        LocalFilesystem(tmp_path).write("users/alice.json", b'{"a": 1}')

        assert (tmp_path / "users" / "alice.json").read_bytes() == b'{"a": 1}'

    def test_no_temp_files_left_behind(self, tmp_path):
        """Test that atomic writes clean up their temp files."""
        filesystem = LocalFilesystem(tmp_path)
        filesystem.write("users/alice.json", b"{}")
        filesystem.update("users/alice.json", b"[]")

        assert [p.name for p in (tmp_path / "users").iterdir()] == ["alice.json"]

    @pytest.mark.parametrize("path", ["../outside.json", "users/../../outside.json"])
    def test_paths_cannot_escape_root(self, tmp_path, path):
        """Test that paths outside the root are rejected."""
        filesystem = LocalFilesystem(tmp_path / "root")

        with pytest.raises(ValueError):
            filesystem.write(path, b"{}")

        assert not (tmp_path / "outside.json").exists()

    def test_root_cannot_be_deleted(self, tmp_path):
        """Test that delete_dir never removes the root."""
        filesystem = LocalFilesystem(tmp_path)
        filesystem.write("users/alice.json", b"{}")

        assert filesystem.delete_dir(".") is False
        assert filesystem.has("users/alice.json") is True

    def test_empty_directory_can_be_deleted(self, tmp_path):
        """Test deleting an empty directory."""
        (tmp_path / "users").mkdir()

        assert LocalFilesystem(tmp_path).delete_dir("users") is True
        assert not (tmp_path / "users").exists()


def test_file_entry_from_path():
    entry = FileEntry.from_path("users/alice.json")

    assert entry.path == "users/alice.json"
    assert entry.filename == "alice"
    assert entry.extension == "json"

    assert FileEntry.from_path("users/README").extension == ""
