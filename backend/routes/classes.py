from flask import Blueprint, request, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from extensions import db
from models.class_model import Class
from models.teacher import Teacher
from utils.filters import build_filters, name_contains, equals
from utils.pagination import parse_page, fetch_page
from utils.roles import require_role

classes_bp = Blueprint('classes', __name__, url_prefix='/list/classes')

# Query-string keys recognized by the class list
CLASS_FILTERS = {
    'search': name_contains(Class.name),
    'supervisorId': equals(Class.supervisor_id),
}


def class_form_data(form):
    """Read the class modal fields"""
    return {
        'name': (form.get('name') or '').strip(),
        'capacity': (form.get('capacity') or '').strip(),
        'supervisor_id': form.get('supervisor_id') or None,
    }


def check_supervisor(supervisor_id):
    if supervisor_id and not db.session.get(Teacher, supervisor_id):
        raise ValueError('Supervisor not found')


@classes_bp.route('', methods=['GET'])
def list_classes():
    """
    Paginated class list with search and supervisor filters
    """
    page = parse_page(request.args)
    filters = build_filters(request.args, CLASS_FILTERS)

    query = (
        Class.query
        .options(selectinload(Class.supervisor), selectinload(Class.students))
        .filter(*filters)
        .order_by(Class.name, Class.id)
    )
    result = fetch_page(query, page)

    current_app.logger.debug(
        f"classes page={page} filters={sorted(set(request.args) & set(CLASS_FILTERS))} total={result.total}"
    )

    teachers = Teacher.query.order_by(Teacher.name, Teacher.surname).all()

    return render_template(
        'list/classes.html',
        result=result,
        teachers=teachers,
        search=request.args.get('search', '')
    )


@classes_bp.route('', methods=['POST'])
@require_role('admin')
def create_class():
    """
    Create new class from the form modal
    """
    data = class_form_data(request.form)

    try:
        check_supervisor(data['supervisor_id'])
        class_obj = Class(
            name=data['name'],
            capacity=data['capacity'],
            supervisor_id=data['supervisor_id']
        )
        db.session.add(class_obj)
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('classes.list_classes'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate class name: {data['name']}")
        flash('Class name must be unique', 'error')
        return redirect(url_for('classes.list_classes'))

    current_app.logger.info(f"Created class {class_obj.id} ({class_obj.name})")
    flash('Class created', 'success')
    return redirect(url_for('classes.list_classes'))


@classes_bp.route('/<class_id>/update', methods=['POST'])
@require_role('admin')
def update_class(class_id):
    """
    Update class information from the form modal
    """
    class_obj = db.session.get(Class, class_id)

    if not class_obj:
        flash('Class not found', 'error')
        return redirect(url_for('classes.list_classes'))

    data = class_form_data(request.form)

    try:
        check_supervisor(data['supervisor_id'])
        if data['name']:
            class_obj.name = data['name']
        if data['capacity']:
            class_obj.capacity = data['capacity']
        class_obj.supervisor_id = data['supervisor_id']
        db.session.commit()
    except ValueError as e:
        db.session.rollback()
        flash(str(e), 'error')
        return redirect(url_for('classes.list_classes'))
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"Duplicate class name: {data['name']}")
        flash('Class name must be unique', 'error')
        return redirect(url_for('classes.list_classes'))

    current_app.logger.info(f"Updated class {class_obj.id}")
    flash('Class updated', 'success')
    return redirect(url_for('classes.list_classes'))


@classes_bp.route('/<class_id>/delete', methods=['POST'])
@require_role('admin')
def delete_class(class_id):
    """
    Delete class; its students lose their class
    """
    class_obj = db.session.get(Class, class_id)

    if not class_obj:
        flash('Class not found', 'error')
        return redirect(url_for('classes.list_classes'))

    db.session.delete(class_obj)
    db.session.commit()

    current_app.logger.info(f"Deleted class {class_id}")
    flash('Class deleted', 'success')
    return redirect(url_for('classes.list_classes'))
