import io
import os

import pytest
from werkzeug.datastructures import FileStorage

from upshare.config import DirectoryStore
from upshare.errors import ListingError, MissingFile, ValidationError
from upshare.storage import (
    MillisecondClock,
    client_filename,
    list_uploads,
    resolve_download,
    resolve_upload_dir,
    save_upload,
)


@pytest.fixture
def store(tmp_path):
    return DirectoryStore.load(str(tmp_path))


def test_clock_never_goes_backwards():
    times = iter([2_000, 1_000, 3_000])
    clock = MillisecondClock(lambda: next(times) * 1_000_000)

    assert [clock(), clock(), clock()] == [2_000, 2_000, 3_000]


@pytest.mark.parametrize('raw, expected', [
    ('a.txt', 'a.txt'),
    ('../../a.txt', 'a.txt'),
    ('C:\\Users\\me\\notes.txt', 'notes.txt'),
    ('my report (1).pdf', 'my report (1).pdf'),
])
def test_client_filename(raw, expected):
    assert client_filename(raw) == expected


@pytest.mark.parametrize('raw', ['', None, 'dir/', '..'])
def test_client_filename_rejects_empty(raw):
    with pytest.raises(MissingFile):
        client_filename(raw)


def test_save_upload_with_timestamp(store, tmp_path):
    file = FileStorage(io.BytesIO(b'data'), filename='x.bin')

    path = save_upload(file, str(tmp_path / 'uploads'), add_timestamp=True)

    prefix, _, name = os.path.basename(path).partition('-')
    assert prefix.isdigit()
    assert name == 'x.bin'


def test_resolve_upload_dir(store, tmp_path):
    assert resolve_upload_dir(store, None) == str(tmp_path / 'uploads')
    assert resolve_upload_dir(store, '') == str(tmp_path / 'uploads')

    store.add_directory('photos')
    assert resolve_upload_dir(store, 'photos') == str(tmp_path / 'photos')

    with pytest.raises(ValidationError):
        resolve_upload_dir(store, 'unknown')


def test_list_uploads_skips_duplicates(store, tmp_path):
    store.add_directory('photos')
    store.add_directory('photos')
    (tmp_path / 'photos' / 'p.png').write_bytes(b'')

    listings = list_uploads(store)

    assert [(l.name, l.files) for l in listings] == [('uploads', []), ('photos', ['p.png'])]


def test_list_uploads_fails_without_base_directory(store, tmp_path):
    (tmp_path / 'uploads').rmdir()
    with pytest.raises(ListingError):
        list_uploads(store)


def test_resolve_download(store, tmp_path):
    store.add_directory('photos')
    uploads = str(tmp_path / 'uploads')

    assert resolve_download(store, 'a.txt') == (uploads, 'a.txt')
    assert resolve_download(store, 'photos/a.txt') == (str(tmp_path / 'photos'), 'a.txt')
    assert resolve_download(store, 'uploads/a.txt') == (uploads, 'a.txt')
    assert resolve_download(store, 'other/a.txt') == (uploads, 'other/a.txt')
