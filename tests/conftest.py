import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from studyhub_app import create_app, db
from studyhub_app.config import Config
from studyhub_app.models import User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    SCHEDULER_ENABLED = False
    LOG_DIR = None
    QUIZ_PERSIST_IN_BACKGROUND = False


@pytest.fixture
def app(tmp_path):
    upload_folder = tmp_path / 'uploads'

    class _Config(TestConfig):
        UPLOAD_FOLDER = str(upload_folder)
        SUMMARY_PDF_FOLDER = str(upload_folder / 'summaries' / 'pdfs')

    app = create_app(_Config)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username='learner', password='password123', email=None):
        user = User(username=username, email=email or f'{username}@example.com')
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def login_as(client):
    def _login(username, password='password123'):
        return client.post('/auth/api/login', json={'username': username, 'password': password})

    return _login


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def logged_in_client(client, user, login_as):
    response = login_as(user.username)
    assert response.status_code == 200
    return client
