"""
Pytest configuration and fixtures for testing.
Each test gets a fresh application bound to an in-memory SQLite database.
"""
import os
import pytest

# Set test environment variables BEFORE importing the app
os.environ.setdefault('FLASK_ENV', 'testing')
os.environ.setdefault('SECRET_KEY', 'sfndsfojoriwew09rjfjndsknfkj')

from quizapp import create_app, db
from quizapp.common.storage import StorageContext


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def storage(app):
    """Storage context bound to the test database session."""
    return StorageContext(db.session)


def make_question(text='Question', correct_index=0, option_count=3):
    """Build a question payload with one correct option."""
    return {
        'text': text,
        'options': [
            {'text': f'{text} option {i + 1}', 'isCorrect': i == correct_index}
            for i in range(option_count)
        ]
    }


def make_quiz_payload(question_count=3, title='Test Quiz', theme='Testing'):
    """Build a valid quiz creation payload."""
    return {
        'title': title,
        'theme': theme,
        'questions': [make_question(f'Question {i + 1}') for i in range(question_count)]
    }


@pytest.fixture
def quiz_payload():
    return make_quiz_payload()


@pytest.fixture
def created_quiz(client, quiz_payload):
    """A committed three question quiz, as returned by the API."""
    response = client.post('/api/quizzes', json=quiz_payload)
    assert response.status_code == 201
    return response.get_json()['data']
