"""Test configuration and fixtures for the portfolio app."""

import io
import re
from datetime import datetime, timedelta

import pytest
from werkzeug.datastructures import FileStorage

from app import create_app
from extensions import db
from models import User, Profile, Project
from utils.data import insert_skill
from utils.security import hash_password, reset_rate_limits


OWNER_EMAIL = 'owner@example.com'
OWNER_PASSWORD = 'owner-password'


# ==============================================================================
# Application fixtures
# ==============================================================================

@pytest.fixture
def app(tmp_path):
    """Create a fresh app with an in-memory database and a temp storage root."""
    reset_rate_limits()
    app = create_app('testing', overrides={'STORAGE_ROOT': str(tmp_path / 'storage')})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner_id(app):
    """Create the operator account and return its id."""
    with app.app_context():
        user = User(email=OWNER_EMAIL, password_hash=hash_password(OWNER_PASSWORD))
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def other_owner_id(app):
    with app.app_context():
        user = User(email='someone@example.com', password_hash=hash_password('x'))
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def auth_client(client, owner_id):
    """Test client signed in as the operator."""
    response = client.post('/admin', data={'email': OWNER_EMAIL, 'password': OWNER_PASSWORD})
    assert response.status_code == 302
    return client


# ==============================================================================
# Record factories
# ==============================================================================

@pytest.fixture
def make_project(app):
    """Insert a project row and return its id."""
    counter = {'n': 0}

    def _make(user_id, **fields):
        counter['n'] += 1
        values = {
            'title': f"Project {counter['n']}",
            'description': 'Generic description',
            'created_at': datetime(2024, 1, 1) + timedelta(days=counter['n']),
        }
        values.update(fields)
        with app.app_context():
            project = Project(user_id=user_id, **values)
            db.session.add(project)
            db.session.commit()
            return project.id

    return _make


@pytest.fixture
def make_skill(app):
    """Insert a skill through the data layer so sort order is assigned."""
    def _make(user_id, name, category='Backend Development', **fields):
        payload = {'name': name, 'category': category, 'logo_url': None, 'is_visible': True}
        payload.update(fields)
        with app.app_context():
            return insert_skill(user_id, payload).id

    return _make


@pytest.fixture
def make_profile(app):
    def _make(user_id, **fields):
        values = {'name': 'Ada Lovelace', 'short_bio_en': 'English bio'}
        values.update(fields)
        with app.app_context():
            profile = Profile(user_id=user_id, **values)
            db.session.add(profile)
            db.session.commit()
            return profile.id

    return _make


# ==============================================================================
# Helpers
# ==============================================================================

@pytest.fixture
def upload():
    """Build an in-memory upload tuple for the test client."""
    def _upload(filename, content=b'data'):
        return (io.BytesIO(content), filename)

    return _upload


@pytest.fixture
def file_storage():
    """Build a werkzeug FileStorage for direct storage calls."""
    def _file(filename, content=b'data'):
        return FileStorage(stream=io.BytesIO(content), filename=filename)

    return _file


def hidden_values(response, name):
    """Values of hidden inputs with the given name, in page order."""
    pattern = r'<input type="hidden" name="' + re.escape(name) + r'" value="([^"]*)"'
    return re.findall(pattern, response.get_data(as_text=True))
