#!/usr/bin/env python
"""
Tests for the class list page and its form modals
"""
import pytest

from extensions import db
from models.class_model import Class
from models.student import Student

TEACHER = {'x-user-role': 'teacher'}


class TestClassModel:

    def test_grade_is_leading_character(self, app):
        assert Class(name='4B', capacity=10).grade == '4'

    @pytest.mark.parametrize('value', [0, -1, 'ten', None])
    def test_capacity_must_be_positive(self, app, value):
        with pytest.raises(ValueError, match='Capacity'):
            Class(name='4B', capacity=value)

    def test_name_is_stripped(self, app):
        assert Class(name='  4B ', capacity=5).name == '4B'


class TestClassList:

    def test_renders_table(self, client, school):
        response = client.get('/list/classes')
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert 'All Classes' in html
        for header in ('Class Name', 'Capacity', 'Grade', 'Supervisor', 'Actions'):
            assert header in html
        assert '<td>1A</td>' in html
        assert '<td class="hidden md:table-cell">John Doe</td>' in html
        assert '<td class="hidden md:table-cell">25</td>' in html

    def test_admin_sees_modals(self, client, school):
        html = client.get('/list/classes').get_data(as_text=True)

        assert 'data-modal="class-create"' in html
        assert html.count('data-modal="class-update"') == 4
        assert html.count('data-modal="class-delete"') == 4

    def test_other_roles_see_no_modals(self, client, school):
        for role in ('teacher', 'student', 'parent'):
            html = client.get('/list/classes', headers={'x-user-role': role}).get_data(as_text=True)

            assert '<td>1A</td>' in html
            assert 'data-modal="class-create"' not in html
            assert 'data-modal="class-update"' not in html
            assert 'data-modal="class-delete"' not in html

    def test_search_filter(self, client, school):
        html = client.get('/list/classes?search=a').get_data(as_text=True)

        assert '<td>1A</td>' in html
        assert '<td>2A</td>' in html
        assert '<td>1B</td>' not in html
        assert 'data-total="2"' in html

    def test_supervisor_filter(self, client, school):
        mary = school['teachers']['mary']
        html = client.get(f'/list/classes?supervisorId={mary.id}').get_data(as_text=True)

        assert '<td>1B</td>' in html
        assert '<td>1A</td>' not in html

    def test_unknown_parameters_are_ignored(self, client, school):
        html = client.get('/list/classes?color=blue&sort=desc').get_data(as_text=True)
        assert 'data-total="4"' in html

    def test_pagination(self, app, client, school):
        app.config['ITEMS_PER_PAGE'] = 3

        first = client.get('/list/classes').get_data(as_text=True)
        second = client.get('/list/classes?page=2').get_data(as_text=True)

        assert '<td>1A</td>' in first and '<td>3C</td>' not in first
        assert '<td>3C</td>' in second and '<td>1A</td>' not in second
        assert 'data-total="4"' in first
        assert 'data-total="4"' in second
        assert 'href="/list/classes?page=2"' in first

    def test_pagination_links_keep_filters(self, app, client, school):
        app.config['ITEMS_PER_PAGE'] = 1

        html = client.get('/list/classes?search=a').get_data(as_text=True)

        assert 'search=a' in html
        assert 'page=2' in html

    def test_bad_page_falls_back_to_first(self, client, school):
        html = client.get('/list/classes?page=oops').get_data(as_text=True)

        assert 'data-page="1"' in html
        assert '<td>1A</td>' in html

    def test_huge_page_is_empty_with_real_total(self, client, school):
        response = client.get('/list/classes?page=99999999999999999999999')
        html = response.get_data(as_text=True)

        assert response.status_code == 200
        assert 'data-total="4"' in html
        assert 'No records found.' in html

    def test_empty_list(self, client):
        html = client.get('/list/classes').get_data(as_text=True)
        assert 'No records found.' in html


class TestClassModals:

    def test_create(self, client, school):
        john = school['teachers']['john']
        response = client.post('/list/classes', data={
            'name': '5D', 'capacity': '22', 'supervisor_id': john.id
        })

        assert response.status_code == 302
        created = Class.query.filter_by(name='5D').one()
        assert created.capacity == 22
        assert created.supervisor_id == john.id

    def test_create_rejects_bad_capacity(self, client, school):
        response = client.post(
            '/list/classes', data={'name': '5D', 'capacity': '0'}, follow_redirects=True
        )

        assert 'Capacity must be a positive integer' in response.get_data(as_text=True)
        assert Class.query.filter_by(name='5D').first() is None

    def test_create_rejects_duplicate_name(self, client, school):
        response = client.post(
            '/list/classes', data={'name': '1A', 'capacity': '10'}, follow_redirects=True
        )

        assert 'Class name must be unique' in response.get_data(as_text=True)
        assert Class.query.filter_by(name='1A').count() == 1

    def test_create_rejects_unknown_supervisor(self, client, school):
        response = client.post(
            '/list/classes',
            data={'name': '5D', 'capacity': '10', 'supervisor_id': 'missing'},
            follow_redirects=True
        )

        assert 'Supervisor not found' in response.get_data(as_text=True)

    def test_update(self, client, school):
        class_obj = school['classes']['3C']
        ade = school['teachers']['ade']

        client.post(f'/list/classes/{class_obj.id}/update', data={
            'name': '3D', 'capacity': '31', 'supervisor_id': ade.id
        })

        updated = db.session.get(Class, class_obj.id)
        assert updated.name == '3D'
        assert updated.capacity == 31
        assert updated.supervisor_id == ade.id

    def test_update_unknown_class(self, client, school):
        response = client.post('/list/classes/missing/update', data={'name': 'X'}, follow_redirects=True)
        assert 'Class not found' in response.get_data(as_text=True)

    def test_delete_keeps_students(self, client, school):
        class_obj = school['classes']['1A']
        class_id = class_obj.id

        client.post(f'/list/classes/{class_id}/delete')

        assert db.session.get(Class, class_id) is None
        assert Student.query.count() == 5
        assert Student.query.filter_by(class_id=class_id).count() == 0

    def test_non_admin_cannot_delete(self, client, school):
        class_id = school['classes']['1A'].id

        response = client.post(f'/list/classes/{class_id}/delete', headers=TEACHER)

        assert response.status_code == 403
        assert db.session.get(Class, class_id) is not None
