"""Persisted list of upload directories and the timestamp preference"""

import json
import logging
import os
import threading

from werkzeug.security import safe_join

from .errors import ConfigCorrupt, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'config.json'
DEFAULT_DIRECTORY = 'uploads'


def default_record():
    return {
        'uploadDirectories': [DEFAULT_DIRECTORY],
        'addTimestamp': False,
    }


def check_directory_name(name):
    """Return ``name`` if it can be registered as an upload directory.

    Only a single plain path segment is accepted, so registered directories
    always live directly inside the server root. The name is otherwise kept
    verbatim, surrounding whitespace included.
    """
    if name is None or not name.strip():
        raise ValidationError('No directory name provided.')
    if name in ('.', '..') or any(c in name for c in '/\\\x00'):
        raise ValidationError(f'Invalid directory name: {name}')
    return name


def _check_record(record, path):
    if not isinstance(record, dict):
        raise ConfigCorrupt(f'{path}: expected a JSON object')
    directories = record.get('uploadDirectories', [DEFAULT_DIRECTORY])
    if not isinstance(directories, list) or not all(isinstance(d, str) for d in directories):
        raise ConfigCorrupt(f'{path}: uploadDirectories must be a list of names')
    for name in directories:
        try:
            check_directory_name(name)
        except ValidationError as e:
            raise ConfigCorrupt(f'{path}: {e.description}') from e
    add_timestamp = record.get('addTimestamp', False)
    if not isinstance(add_timestamp, bool):
        raise ConfigCorrupt(f'{path}: addTimestamp must be true or false')
    return {'uploadDirectories': directories, 'addTimestamp': add_timestamp}


class DirectoryStore:
    """Upload directories registered under ``root``, backed by a JSON file.

    Every mutation rewrites the whole record while holding ``_lock``, so
    concurrent requests cannot lose each other's additions.
    """

    def __init__(self, root, path=None, upload_folder=None):
        self.root = os.path.abspath(root)
        self.path = path or os.path.join(self.root, CONFIG_FILENAME)
        self.upload_folder = os.path.abspath(upload_folder or os.path.join(self.root, DEFAULT_DIRECTORY))
        self._lock = threading.Lock()
        self._record = default_record()

    @classmethod
    def load(cls, root, path=None, upload_folder=None):
        store = cls(root, path, upload_folder)
        store.reload()
        return store

    def reload(self):
        """Read the record from disk, writing the defaults if there is none"""
        with self._lock:
            try:
                with open(self.path, encoding='utf-8') as f:
                    raw = f.read()
            except FileNotFoundError:
                logger.info('No configuration at %s, writing defaults', self.path)
                os.makedirs(os.path.dirname(self.path), exist_ok=True)
                self._record = default_record()
                self._save()
            else:
                try:
                    record = json.loads(raw)
                except ValueError as e:
                    raise ConfigCorrupt(f'{self.path}: {e}') from e
                self._record = _check_record(record, self.path)

            for name in self._record['uploadDirectories']:
                os.makedirs(self.directory_path(name), exist_ok=True)
            os.makedirs(self.upload_folder, exist_ok=True)

    @property
    def directories(self):
        return list(self._record['uploadDirectories'])

    @property
    def add_timestamp(self):
        return self._record['addTimestamp']

    def is_registered(self, name):
        return name == DEFAULT_DIRECTORY or name in self._record['uploadDirectories']

    def directory_path(self, name):
        """Absolute path of directory ``name``, or None if it is outside the root.

        The base directory maps to ``upload_folder`` wherever that is.
        """
        if name == DEFAULT_DIRECTORY:
            return self.upload_folder
        return safe_join(self.root, name)

    def add_directory(self, name):
        name = check_directory_name(name)
        with self._lock:
            self._record['uploadDirectories'].append(name)
            self._save()
        # The record stays persisted even if creating the directory fails.
        path = self.directory_path(name)
        os.makedirs(path, exist_ok=True)
        logger.info('Registered upload directory %s', path)
        return path

    def set_timestamp_preference(self, add_timestamp):
        add_timestamp = bool(add_timestamp)
        with self._lock:
            if self._record['addTimestamp'] == add_timestamp:
                return
            self._record['addTimestamp'] = add_timestamp
            self._save()

    def _save(self):
        tmp_path = self.path + '.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(self._record, f, indent=2)
        os.replace(tmp_path, self.path)
