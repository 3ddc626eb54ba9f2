"""
Pytest configuration and fixtures for the courseware backend tests
"""
import pytest
import os
from datetime import timedelta
from app import create_app, db
from app.utils import generate_token


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing"""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app('testing')

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def clean_tables(app):
    """Empty every table after each test"""
    yield
    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def cli_runner(app):
    """Runner for the app's Flask CLI commands"""
    return app.test_cli_runner()


def make_token(app, user_id, role, expires_in=timedelta(hours=1)):
    with app.app_context():
        return generate_token(user_id, role, expires_in)


def make_headers(app, user_id, role):
    return {
        'Authorization': f'Bearer {make_token(app, user_id, role)}',
        'Content-Type': 'application/json'
    }


@pytest.fixture
def token_factory(app):
    """Mint bearer tokens for arbitrary identities"""
    def _make(user_id, role, expires_in=timedelta(hours=1)):
        return make_token(app, user_id, role, expires_in)

    return _make


@pytest.fixture
def teacher_headers(app):
    """Auth headers for a teacher"""
    return make_headers(app, 'teacher-1', 'teacher')


@pytest.fixture
def other_teacher_headers(app):
    """Auth headers for a second teacher"""
    return make_headers(app, 'teacher-2', 'teacher')


@pytest.fixture
def student_headers(app):
    """Auth headers for a student"""
    return make_headers(app, 'student-1', 'student')


@pytest.fixture
def admin_headers(app):
    """Auth headers for an admin"""
    return make_headers(app, 'admin-1', 'admin')


@pytest.fixture
def announcement_factory(client, teacher_headers):
    """Create announcements through the API"""
    def _create(headers=None, **kwargs):
        payload = {
            'course_code': 'CS101',
            'title': 'Welcome',
            'body': '<p>Welcome to the course</p>',
        }
        payload.update(kwargs)
        response = client.post('/api/announcements', json=payload,
                               headers=headers or teacher_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return _create
