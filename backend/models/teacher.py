"""
Teacher Model for the school dashboard
Represents teaching staff who supervise classes and teach subjects
"""

from datetime import datetime
import uuid
from extensions import db
from sqlalchemy.orm import validates


class Teacher(db.Model):
    __tablename__ = 'teachers'

    # ============ CORE IDENTIFIERS ============
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # ============ BIO DATA ============
    name = db.Column(db.String(100), nullable=False)
    surname = db.Column(db.String(100), nullable=False)

    # ============ CONTACT ============
    email = db.Column(db.String(120), unique=True, nullable=True)
    phone = db.Column(db.String(20), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # ============ RELATIONSHIPS ============
    # Subject.teachers <-> Teacher.subjects through subject_teachers
    subjects = db.relationship(
        'Subject',
        secondary='subject_teachers',
        back_populates='teachers',
        order_by='Subject.name'
    )

    # Class.supervisor_id -> Teacher.id
    supervised_classes = db.relationship(
        'Class',
        back_populates='supervisor',
        order_by='Class.name'
    )

    # ============ VALIDATION ============
    @validates('name', 'surname')
    def validate_names(self, key, value):
        if not value or not value.strip():
            raise ValueError(f"Teacher {key} is required")
        return value.strip()

    @validates('email')
    def validate_email(self, key, value):
        if not value:
            return None
        if '@' not in value:
            raise ValueError('Invalid email')
        return value.strip().lower()

    # ============ HELPERS ============
    @property
    def full_name(self):
        return f"{self.name} {self.surname}"

    def __repr__(self):
        return f'<Teacher {self.full_name}>'
