#routes/subjects.py
from flask import Blueprint, request, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from extensions import db
from models.subject import Subject
from models.teacher import Teacher
from utils.filters import build_filters, name_contains, related_to
from utils.pagination import parse_page, fetch_page
from utils.roles import require_role

subjects_bp = Blueprint('subjects', __name__, url_prefix='/list/subjects')

SUBJECT_FILTERS = {
    'search': name_contains(Subject.name),
    'teacherId': related_to(Subject.teachers, Teacher.id),
}


def selected_teachers(form):
    """Teachers picked in the subject modal; unknown ids are an error"""
    teacher_ids = [tid for tid in form.getlist('teacher_ids') if tid]
    if not teacher_ids:
        return []

    teachers = Teacher.query.filter(Teacher.id.in_(teacher_ids)).all()
    if len(teachers) != len(set(teacher_ids)):
        raise ValueError('Teacher not found')
    return teachers


@subjects_bp.route('', methods=['GET'])
def list_subjects():
    """
    Paginated subject list with search filter
    """
    page = parse_page(request.args)
    filters = build_filters(request.args, SUBJECT_FILTERS)

    query = (
        Subject.query
        .options(selectinload(Subject.teachers))
        .filter(*filters)
        .order_by(Subject.name, Subject.id)
    )
    result = fetch_page(query, page)

    current_app.logger.debug(
        f"subjects page={page} filters={sorted(set(request.args) & set(SUBJECT_FILTERS))} total={result.total}"
    )

    teachers = Teacher.query.order_by(Teacher.name, Teacher.surname).all()

    return render_template(
        'list/subjects.html',
        result=result,
        teachers=teachers,
        search=request.args.get('search', '')
    )


@subjects_bp.route('', methods=['POST'])
@require_role('admin')
def create_subject():
    """
    Create new subject
    """
    name = (request.form.get('name') or '').strip()

    try:
        subject = Subject(name=name, teachers=selected_teachers(request.form))
        db.session.add(subject)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('subjects.list_subjects'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate subject name: {name}")
        flash('Subject name must be unique', 'error')
        return redirect(url_for('subjects.list_subjects'))

    current_app.logger.info(f"Created subject {subject.id} ({subject.name})")
    flash('Subject created', 'success')
    return redirect(url_for('subjects.list_subjects'))


@subjects_bp.route('/<subject_id>/update', methods=['POST'])
@require_role('admin')
def update_subject(subject_id):
    """
    Update subject name and teachers
    """
    subject = db.session.get(Subject, subject_id)

    if not subject:
        flash('Subject not found', 'error')
        return redirect(url_for('subjects.list_subjects'))

    name = (request.form.get('name') or '').strip()

    try:
        if name:
            subject.name = name
        subject.teachers = selected_teachers(request.form)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('subjects.list_subjects'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate subject name: {name}")
        flash('Subject name must be unique', 'error')
        return redirect(url_for('subjects.list_subjects'))

    current_app.logger.info(f"Updated subject {subject.id}")
    flash('Subject updated', 'success')
    return redirect(url_for('subjects.list_subjects'))


@subjects_bp.route('/<subject_id>/delete', methods=['POST'])
@require_role('admin')
def delete_subject(subject_id):
    """
    Delete subject and its teacher assignments
    """
    subject = db.session.get(Subject, subject_id)

    if not subject:
        flash('Subject not found', 'error')
        return redirect(url_for('subjects.list_subjects'))

    db.session.delete(subject)
    db.session.commit()

    current_app.logger.info(f"Deleted subject {subject_id}")
    flash('Subject deleted', 'success')
    return redirect(url_for('subjects.list_subjects'))
