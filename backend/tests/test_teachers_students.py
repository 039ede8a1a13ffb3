#!/usr/bin/env python
"""
Tests for the teacher and student list pages
"""
from extensions import db
from models.class_model import Class
from models.student import Student
from models.teacher import Teacher


class TestTeacherList:

    def test_renders_subjects_and_classes(self, client, school):
        html = client.get('/list/teachers').get_data(as_text=True)

        assert 'All Teachers' in html
        assert '<td>John Doe</td>' in html
        assert '<td class="hidden md:table-cell">Mathematics</td>' in html
        assert '<td class="hidden md:table-cell">1A,2A</td>' in html

    def test_search_matches_surname(self, client, school):
        html = client.get('/list/teachers?search=bello').get_data(as_text=True)

        assert '<td>Ade Bello</td>' in html
        assert '<td>John Doe</td>' not in html

    def test_subject_filter(self, client, school):
        english = school['subjects']['English']
        html = client.get(f'/list/teachers?subjectId={english.id}').get_data(as_text=True)

        assert '<td>Mary Major</td>' in html
        assert '<td>John Doe</td>' not in html

    def test_create_and_delete(self, client, school):
        client.post('/list/teachers', data={
            'name': 'Zoe', 'surname': 'Zed', 'email': 'ZOE@school.test'
        })
        zoe = Teacher.query.filter_by(name='Zoe').one()
        assert zoe.email == 'zoe@school.test'

        john = school['teachers']['john']
        john_id = john.id
        client.post(f'/list/teachers/{john_id}/delete')

        assert db.session.get(Teacher, john_id) is None
        assert Class.query.filter_by(supervisor_id=john_id).count() == 0
        assert Class.query.count() == 4

    def test_duplicate_email(self, client, school):
        response = client.post('/list/teachers', data={
            'name': 'Jon', 'surname': 'Dup', 'email': 'john@school.test'
        }, follow_redirects=True)

        assert 'Teacher email must be unique' in response.get_data(as_text=True)


class TestStudentList:

    def test_renders_class_name(self, client, school):
        html = client.get('/list/students').get_data(as_text=True)

        assert 'All Students' in html
        assert '<td>Amy Adams</td>' in html
        assert '<td class="hidden md:table-cell">1A</td>' in html

    def test_class_filter(self, client, school):
        class_1a = school['classes']['1A']
        html = client.get(f'/list/students?classId={class_1a.id}').get_data(as_text=True)

        assert '<td>Amy Adams</td>' in html
        assert '<td>Ben Brown</td>' in html
        assert '<td>Cara Clark</td>' not in html
        assert 'data-total="2"' in html

    def test_non_admin_sees_no_modals(self, client, school):
        html = client.get('/list/students', headers={'x-user-role': 'parent'}).get_data(as_text=True)
        assert 'data-modal="student-' not in html

    def test_create_update(self, client, school):
        class_3c = school['classes']['3C']
        client.post('/list/students', data={'name': 'Fay', 'surname': 'Fox', 'class_id': class_3c.id})

        fay = Student.query.filter_by(name='Fay').one()
        assert fay.class_id == class_3c.id

        client.post(f'/list/students/{fay.id}/update', data={'name': 'Faye', 'surname': 'Fox', 'class_id': ''})

        updated = db.session.get(Student, fay.id)
        assert updated.name == 'Faye'
        assert updated.class_id is None

    def test_create_rejects_unknown_class(self, client, school):
        response = client.post('/list/students', data={
            'name': 'Gus', 'surname': 'Gray', 'class_id': 'missing'
        }, follow_redirects=True)

        assert 'Class not found' in response.get_data(as_text=True)
        assert Student.query.filter_by(name='Gus').first() is None
