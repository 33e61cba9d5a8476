"""Where uploads are written and how they are found again."""

import logging
import os
import re
import threading
import time
from collections import namedtuple

from .config import DEFAULT_DIRECTORY
from .errors import ListingError, MissingFile, ValidationError

logger = logging.getLogger(__name__)

DirectoryListing = namedtuple('DirectoryListing', ['name', 'files'])


class MillisecondClock:
    """Epoch milliseconds that never go backwards within one process"""

    def __init__(self, time_ns=time.time_ns):
        self._time_ns = time_ns
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self):
        with self._lock:
            self._last = max(self._last, self._time_ns() // 1_000_000)
            return self._last


clock = MillisecondClock()


def client_filename(raw):
    """Final path component of a client supplied filename"""
    name = re.split(r'[\\/]', raw or '')[-1]
    if name in ('', '.', '..'):
        raise MissingFile()
    return name


def stored_filename(name, add_timestamp):
    if add_timestamp:
        return f'{clock()}-{name}'
    return name


def resolve_upload_dir(store, directory):
    """Absolute path of the directory an upload goes to, created if missing.

    Only registered directories are accepted; an absent field means the base
    upload directory.
    """
    directory = directory or DEFAULT_DIRECTORY
    if not store.is_registered(directory):
        raise ValidationError(f'Unknown upload directory: {directory}')
    path = store.directory_path(directory)
    if path is None:
        raise ValidationError(f'Invalid upload directory: {directory}')
    os.makedirs(path, exist_ok=True)
    return path


def save_upload(file, directory_path, add_timestamp):
    """Write a werkzeug ``FileStorage`` into ``directory_path``.

    An existing file with the same name is overwritten.
    """
    filename = stored_filename(client_filename(file.filename), add_timestamp)
    filepath = os.path.join(directory_path, filename)
    file.save(filepath)
    return filepath


def scan_directory(path):
    with os.scandir(path) as entries:
        return sorted(entry.name for entry in entries if entry.is_file())


def list_uploads(store):
    """Files in the base directory followed by each configured directory.

    A failure to read the base directory fails the whole listing. Configured
    directories removed behind the server's back are shown empty.
    """
    try:
        listings = [DirectoryListing(DEFAULT_DIRECTORY, scan_directory(store.directory_path(DEFAULT_DIRECTORY)))]
    except OSError as e:
        logger.error('Error reading uploads directory: %s', e)
        raise ListingError() from e

    seen = {DEFAULT_DIRECTORY}
    for name in store.directories:
        if name in seen:
            continue
        seen.add(name)
        path = store.directory_path(name)
        try:
            files = scan_directory(path)
        except FileNotFoundError:
            files = []
        except OSError as e:
            logger.error('Error reading %s: %s', path, e)
            raise ListingError() from e
        listings.append(DirectoryListing(name, files))
    return listings


def resolve_download(store, subpath):
    """Split a download path into (directory path, filename).

    ``<directory>/<filename>`` addresses a registered directory; anything else
    is looked up in the base upload directory.
    """
    head, sep, tail = subpath.partition('/')
    if sep and tail and store.is_registered(head):
        return store.directory_path(head), tail
    return store.directory_path(DEFAULT_DIRECTORY), subpath
