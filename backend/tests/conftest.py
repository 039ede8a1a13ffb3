"""
Shared fixtures for the dashboard tests
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from app import create_app
from extensions import db
from models.class_model import Class
from models.teacher import Teacher
from models.student import Student
from models.subject import Subject

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'JWT_SECRET_KEY': 'test-gateway-secret-key-0123456789abcdef',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'ITEMS_PER_PAGE': 10,
    'DASHBOARD_ROLE': 'admin',
}


@pytest.fixture(scope='function')
def app():
    """Create test app"""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def school(app):
    """A small school: three teachers, four classes, three subjects, five students"""
    john = Teacher(name='John', surname='Doe', email='john@school.test')
    mary = Teacher(name='Mary', surname='Major', email='mary@school.test')
    ade = Teacher(name='Ade', surname='Bello')

    classes = {
        '1A': Class(name='1A', capacity=20, supervisor=john),
        '1B': Class(name='1B', capacity=25, supervisor=mary),
        '2A': Class(name='2A', capacity=18, supervisor=john),
        '3C': Class(name='3C', capacity=30),
    }

    subjects = {
        'Mathematics': Subject(name='Mathematics', teachers=[john, mary]),
        'English': Subject(name='English', teachers=[mary]),
        'Physics': Subject(name='Physics', teachers=[]),
    }

    students = [
        Student(name='Amy', surname='Adams', class_=classes['1A']),
        Student(name='Ben', surname='Brown', class_=classes['1A']),
        Student(name='Cara', surname='Clark', class_=classes['1B']),
        Student(name='Dan', surname='Dean', class_=classes['2A']),
        Student(name='Eve', surname='Evans'),
    ]

    db.session.add_all([john, mary, ade, *classes.values(), *subjects.values(), *students])
    db.session.commit()

    return {
        'teachers': {'john': john, 'mary': mary, 'ade': ade},
        'classes': classes,
        'subjects': subjects,
        'students': students,
    }
