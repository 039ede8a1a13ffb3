from flask import Blueprint, request, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from extensions import db
from models.student import Student
from models.class_model import Class
from utils.filters import build_filters, name_contains, equals
from utils.pagination import parse_page, fetch_page
from utils.roles import require_role

students_bp = Blueprint('students', __name__, url_prefix='/list/students')

STUDENT_FILTERS = {
    'search': name_contains(Student.name, Student.surname),
    'classId': equals(Student.class_id),
}


def student_form_data(form):
    return {
        'name': (form.get('name') or '').strip(),
        'surname': (form.get('surname') or '').strip(),
        'email': (form.get('email') or '').strip() or None,
        'class_id': form.get('class_id') or None,
    }


def check_class(class_id):
    if class_id and not db.session.get(Class, class_id):
        raise ValueError('Class not found')


@students_bp.route('', methods=['GET'])
def list_students():
    """
    Paginated student list with search and class filters
    """
    page = parse_page(request.args)
    filters = build_filters(request.args, STUDENT_FILTERS)

    query = (
        Student.query
        .options(selectinload(Student.class_))
        .filter(*filters)
        .order_by(Student.surname, Student.name, Student.id)
    )
    result = fetch_page(query, page)

    current_app.logger.debug(
        f"students page={page} filters={sorted(set(request.args) & set(STUDENT_FILTERS))} total={result.total}"
    )

    classes = Class.query.order_by(Class.name).all()

    return render_template(
        'list/students.html',
        result=result,
        classes=classes,
        search=request.args.get('search', '')
    )


@students_bp.route('', methods=['POST'])
@require_role('admin')
def create_student():
    """
    Create new student
    """
    data = student_form_data(request.form)

    try:
        check_class(data['class_id'])
        student = Student(**data)
        db.session.add(student)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('students.list_students'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate student email: {data['email']}")
        flash('Student email must be unique', 'error')
        return redirect(url_for('students.list_students'))

    current_app.logger.info(f"Created student {student.id} ({student.full_name})")
    flash('Student created', 'success')
    return redirect(url_for('students.list_students'))


@students_bp.route('/<student_id>/update', methods=['POST'])
@require_role('admin')
def update_student(student_id):
    """
    Update student information
    """
    student = db.session.get(Student, student_id)

    if not student:
        flash('Student not found', 'error')
        return redirect(url_for('students.list_students'))

    data = student_form_data(request.form)

    try:
        check_class(data['class_id'])
        student.name = data['name'] or student.name
        student.surname = data['surname'] or student.surname
        student.email = data['email']
        student.class_id = data['class_id']
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('students.list_students'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate student email on update: {student_id}")
        flash('Student email must be unique', 'error')
        return redirect(url_for('students.list_students'))

    current_app.logger.info(f"Updated student {student_id}")
    flash('Student updated', 'success')
    return redirect(url_for('students.list_students'))


@students_bp.route('/<student_id>/delete', methods=['POST'])
@require_role('admin')
def delete_student(student_id):
    student = db.session.get(Student, student_id)

    if not student:
        flash('Student not found', 'error')
        return redirect(url_for('students.list_students'))

    db.session.delete(student)
    db.session.commit()

    current_app.logger.info(f"Deleted student {student_id}")
    flash('Student deleted', 'success')
    return redirect(url_for('students.list_students'))
