import json

import pytest

from app import create_app
from config import Config
from extensions import db

TEMPLATE = [
    {
        'title': 'Criterion 1: Mission',
        'type': 'must',
        'sub_criteria': [
            {'text': '1.1 Mission statement', 'questions': ['Q1', 'Q2', 'Q3', 'Q4']},
            {'text': '1.2 Objectives', 'questions': ['Q1', 'Q2']},
        ],
    },
    {
        'title': 'Criterion 2: Facilities',
        'type': 'should',
        'sub_criteria': [
            {'text': '2.1 Laboratories', 'questions': ['Q1', 'Q2', 'Q3', 'Q4']},
        ],
    },
]


def write_template(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def make_app(tmp_path, template_path):
    class TestConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test.db'}"
        CRITERIA_DATA_PATH = str(template_path)

    return create_app(TestConfig)


@pytest.fixture
def template_path(tmp_path):
    return write_template(tmp_path / 'criteria_data.json', TEMPLATE)


@pytest.fixture
def app(tmp_path, template_path):
    app = make_app(tmp_path, template_path)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def create_evaluation(client):
    def _create(program='BSc in CSE', university='BUET'):
        resp = client.post('/api/evaluations', json={'programName': program, 'universityName': university})
        assert resp.status_code == 200
        return resp.get_json()['id']
    return _create
