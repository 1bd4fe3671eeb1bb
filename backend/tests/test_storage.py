"""File storage: generated names, round trip, confinement, best-effort delete."""

import io
import uuid

import pytest

from api.exceptions import NotFoundError, StorageIOError
from api.storage import FileStorageService, file_extension


@pytest.fixture
def storage(upload_dir):
    return FileStorageService()


@pytest.mark.parametrize("original, expected", [
    ("photo.png", ".png"),
    ("archive.tar.gz", ".gz"),
    ("README", ""),
    (".bashrc", ""),
    ("dir.v2/notes", ""),
    ("", ""),
    (None, ""),
])
def test_file_extension(original, expected):
    assert file_extension(original) == expected


def test_store_load_delete_round_trip(storage, upload_dir):
    payload = b"\x89PNG fake image bytes"

    name = storage.store(io.BytesIO(payload), "photo.png")

    assert name.endswith(".png")
    assert name != "photo.png"
    assert (upload_dir / name).read_bytes() == payload

    with storage.load(name) as handle:
        assert handle.read() == payload

    assert storage.delete(name) is True
    assert storage.delete(name) is False


def test_store_creates_missing_directory(storage, upload_dir):
    assert not upload_dir.exists()

    storage.store(io.BytesIO(b"x"), "a.txt")

    assert upload_dir.is_dir()


def test_store_generates_fresh_names(storage):
    names = {storage.store(io.BytesIO(b"same"), "same.jpg") for _ in range(5)}
    assert len(names) == 5


def test_store_write_failure_raises_storage_error(storage, monkeypatch):
    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(storage.storage, "_save", boom)

    with pytest.raises(StorageIOError) as exc:
        storage.store(io.BytesIO(b"x"), "a.txt")
    assert exc.value.operation == "store"


def test_load_missing_file_raises_not_found(storage):
    with pytest.raises(NotFoundError) as exc:
        storage.load("does-not-exist.png")
    assert (exc.value.entity, exc.value.field) == ("File", "name")


def test_load_refuses_path_outside_root(storage, upload_dir):
    upload_dir.mkdir()
    secret = upload_dir.parent / "secret.txt"
    secret.write_text("top secret")

    with pytest.raises(NotFoundError):
        storage.load("../secret.txt")


def test_delete_refuses_path_outside_root(storage, upload_dir):
    upload_dir.mkdir()
    secret = upload_dir.parent / "secret.txt"
    secret.write_text("top secret")

    assert storage.delete("../secret.txt") is False
    assert secret.exists()


def test_delete_io_error_is_reported_as_false(storage, monkeypatch):
    name = storage.store(io.BytesIO(b"x"), "a.txt")

    def boom(name):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(storage.storage, "delete", boom)

    assert storage.delete(name) is False


def test_store_name_rejected_by_os_raises_storage_error(storage):
    with pytest.raises(StorageIOError) as exc:
        storage.store(io.BytesIO(b"x"), "a.p\x00ng")
    assert exc.value.operation == "store"


def test_store_overwrites_on_name_collision(storage, upload_dir, monkeypatch):
    fixed = uuid.UUID("12345678-1234-5678-1234-567812345678")
    monkeypatch.setattr(uuid, "uuid4", lambda: fixed)

    first = storage.store(io.BytesIO(b"first"), "a.txt")
    second = storage.store(io.BytesIO(b"second"), "b.txt")

    assert first == second == f"{fixed}.txt"
    assert (upload_dir / first).read_bytes() == b"second"
