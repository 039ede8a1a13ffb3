from flask import Blueprint, request, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from extensions import db
from models.teacher import Teacher
from models.subject import Subject
from utils.filters import build_filters, name_contains, related_to
from utils.pagination import parse_page, fetch_page
from utils.roles import require_role

teachers_bp = Blueprint('teachers', __name__, url_prefix='/list/teachers')

TEACHER_FILTERS = {
    'search': name_contains(Teacher.name, Teacher.surname),
    'subjectId': related_to(Teacher.subjects, Subject.id),
}

UPDATABLE_FIELDS = ['name', 'surname', 'email', 'phone']


def selected_subjects(form):
    subject_ids = [sid for sid in form.getlist('subject_ids') if sid]
    if not subject_ids:
        return []

    subjects = Subject.query.filter(Subject.id.in_(subject_ids)).all()
    if len(subjects) != len(set(subject_ids)):
        raise ValueError('Subject not found')
    return subjects


@teachers_bp.route('', methods=['GET'])
def list_teachers():
    """
    Paginated teacher list with search and subject filters
    """
    page = parse_page(request.args)
    filters = build_filters(request.args, TEACHER_FILTERS)

    query = (
        Teacher.query
        .options(selectinload(Teacher.subjects), selectinload(Teacher.supervised_classes))
        .filter(*filters)
        .order_by(Teacher.name, Teacher.surname, Teacher.id)
    )
    result = fetch_page(query, page)

    current_app.logger.debug(
        f"teachers page={page} filters={sorted(set(request.args) & set(TEACHER_FILTERS))} total={result.total}"
    )

    subjects = Subject.query.order_by(Subject.name).all()

    return render_template(
        'list/teachers.html',
        result=result,
        subjects=subjects,
        search=request.args.get('search', '')
    )


@teachers_bp.route('', methods=['POST'])
@require_role('admin')
def create_teacher():
    """
    Create new teacher (admin only)
    """
    data = {field: (request.form.get(field) or '').strip() for field in UPDATABLE_FIELDS}

    try:
        teacher = Teacher(
            name=data['name'],
            surname=data['surname'],
            email=data['email'] or None,
            phone=data['phone'] or None,
            subjects=selected_subjects(request.form)
        )
        db.session.add(teacher)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('teachers.list_teachers'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate teacher email: {data['email']}")
        flash('Teacher email must be unique', 'error')
        return redirect(url_for('teachers.list_teachers'))

    current_app.logger.info(f"Created teacher {teacher.id} ({teacher.full_name})")
    flash('Teacher created', 'success')
    return redirect(url_for('teachers.list_teachers'))


@teachers_bp.route('/<teacher_id>/update', methods=['POST'])
@require_role('admin')
def update_teacher(teacher_id):
    """
    Update teacher information
    """
    teacher = db.session.get(Teacher, teacher_id)

    if not teacher:
        flash('Teacher not found', 'error')
        return redirect(url_for('teachers.list_teachers'))

    try:
        for field in UPDATABLE_FIELDS:
            if field in request.form:
                value = request.form[field].strip()
                if field in ('email', 'phone'):
                    value = value or None
                setattr(teacher, field, value)
        teacher.subjects = selected_subjects(request.form)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('teachers.list_teachers'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate teacher email on update: {teacher_id}")
        flash('Teacher email must be unique', 'error')
        return redirect(url_for('teachers.list_teachers'))

    current_app.logger.info(f"Updated teacher {teacher_id}")
    flash('Teacher updated', 'success')
    return redirect(url_for('teachers.list_teachers'))


@teachers_bp.route('/<teacher_id>/delete', methods=['POST'])
@require_role('admin')
def delete_teacher(teacher_id):
    """
    Delete teacher; supervised classes lose their supervisor
    """
    teacher = db.session.get(Teacher, teacher_id)

    if not teacher:
        flash('Teacher not found', 'error')
        return redirect(url_for('teachers.list_teachers'))

    db.session.delete(teacher)
    db.session.commit()

    current_app.logger.info(f"Deleted teacher {teacher_id}")
    flash('Teacher deleted', 'success')
    return redirect(url_for('teachers.list_teachers'))
