import pytest

from upshare import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app(str(tmp_path))
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions['upshare']
