"""
Class Model for the school dashboard
Represents a class with its capacity and supervising teacher
"""

from datetime import datetime
import uuid
from extensions import db
from sqlalchemy.orm import validates


class Class(db.Model):
    __tablename__ = 'classes'

    # ============ CORE IDENTIFIERS ============
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # ============ CLASS IDENTITY ============
    name = db.Column(db.String(100), unique=True, nullable=False)
    # Examples: 1A, 4B, 6C

    capacity = db.Column(db.Integer, nullable=False, default=20)

    # ============ SUPERVISOR ============
    supervisor_id = db.Column(
        db.String(36),
        db.ForeignKey('teachers.id', ondelete='SET NULL'),
        nullable=True
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # ============ RELATIONSHIPS ============
    supervisor = db.relationship('Teacher', back_populates='supervised_classes')
    students = db.relationship(
        'Student',
        back_populates='class_',
        order_by='Student.surname'
    )

    # ============ VALIDATION ============
    @validates('name')
    def validate_name(self, key, value):
        if not value or not value.strip():
            raise ValueError("Class name is required")
        return value.strip()

    @validates('capacity')
    def validate_capacity(self, key, value):
        try:
            value = int(value)
        except (TypeError, ValueError):
            raise ValueError("Capacity must be a positive integer")
        if value <= 0:
            raise ValueError("Capacity must be a positive integer")
        return value

    # ============ HELPERS ============
    @property
    def grade(self):
        """Grade level shown on the dashboard: the leading character of the name."""
        return self.name[:1] if self.name else ''

    @property
    def supervisor_name(self):
        return self.supervisor.full_name if self.supervisor else ''

    def __repr__(self):
        return f'<Class {self.name}>'
