"""Flask application serving uploads from a root directory."""

import os

from flask import Blueprint, Flask, Response, current_app, redirect, request, send_from_directory, url_for
from werkzeug.exceptions import HTTPException, NotFound

from .config import CONFIG_FILENAME, DEFAULT_DIRECTORY, DirectoryStore
from .errors import FileMissing, MissingFile
from .storage import list_uploads, resolve_download, resolve_upload_dir, save_upload
from .templates import render_index

bp = Blueprint('upshare', __name__)


def create_app(root=None, **overrides):
    """Build the application for ``root`` (the working directory by default).

    Raises ``ConfigCorrupt`` if the stored configuration cannot be read.
    """
    app = Flask(__name__)

    # Configuration
    root = os.path.abspath(root or os.getcwd())
    app.config['UPSHARE_ROOT'] = root
    app.config['UPLOAD_FOLDER'] = os.path.join(root, DEFAULT_DIRECTORY)
    app.config['CONFIG_PATH'] = os.path.join(root, CONFIG_FILENAME)
    app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024  # 500MB max
    app.config.update(overrides)

    app.extensions['upshare'] = DirectoryStore.load(
        root, app.config['CONFIG_PATH'], upload_folder=app.config['UPLOAD_FOLDER'])

    app.register_blueprint(bp)
    app.register_error_handler(HTTPException, plain_http_error)
    app.register_error_handler(Exception, plain_server_error)
    return app


def get_store():
    return current_app.extensions['upshare']


def plain_http_error(error):
    return Response(error.description, status=error.code, mimetype='text/plain')


def plain_server_error(error):
    current_app.logger.exception('Request to %s failed', request.path)
    return Response('Internal server error.', status=500, mimetype='text/plain')


@bp.route('/')
def index():
    store = get_store()
    listings = list_uploads(store)
    return render_index(store.directories, listings, store.add_timestamp, DEFAULT_DIRECTORY)


@bp.route('/upload', methods=['POST'])
def upload_file():
    file = request.files.get('file')
    if file is None or not file.filename:
        raise MissingFile()

    store = get_store()
    add_timestamp = bool(request.form.get('addTimestamp'))
    directory_path = resolve_upload_dir(store, request.form.get('directory'))
    filepath = save_upload(file, directory_path, add_timestamp)
    store.set_timestamp_preference(add_timestamp)

    print(f"📥 Received: {os.path.relpath(filepath, store.root)}")
    return redirect(url_for('upshare.index'))


@bp.route('/add-directory', methods=['POST'])
def add_directory():
    get_store().add_directory(request.form.get('newDirectory'))
    return redirect(url_for('upshare.index'))


@bp.route('/download/<path:filename>')
def download_file(filename):
    """Send a stored file as an attachment"""
    directory, name = resolve_download(get_store(), filename)
    try:
        return send_from_directory(directory, name, as_attachment=True)
    except (NotFound, OSError) as e:
        current_app.logger.error('Error downloading file %s: %s', filename, e)
        raise FileMissing() from e
