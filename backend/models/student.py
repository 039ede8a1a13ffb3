"""
Student Model for the school dashboard
Represents enrolled learners and the class they belong to
"""

from datetime import datetime
import uuid
from extensions import db
from sqlalchemy.orm import validates


class Student(db.Model):
    __tablename__ = 'students'

    # ============ CORE IDENTIFIERS ============
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # ============ BIO DATA ============
    name = db.Column(db.String(100), nullable=False)
    surname = db.Column(db.String(100), nullable=False)

    # ============ CONTACT (STUDENT) ============
    email = db.Column(db.String(120), unique=True, nullable=True)

    # ============ ACADEMIC ============
    class_id = db.Column(
        db.String(36),
        db.ForeignKey('classes.id', ondelete='SET NULL'),
        nullable=True
    )  # Current class only

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # ============ RELATIONSHIPS ============
    class_ = db.relationship('Class', back_populates='students')

    # ============ VALIDATION ============
    @validates('name', 'surname')
    def validate_names(self, key, value):
        if not value or not value.strip():
            raise ValueError(f"Student {key} is required")
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
        return f'<Student {self.full_name}>'
