"""
Subject Model for the school dashboard
Represents a subject and the teachers who teach it
"""
from datetime import datetime
import uuid
from extensions import db
from sqlalchemy.orm import validates


# =====================
# ASSOCIATION TABLE
# =====================
subject_teachers = db.Table(
    'subject_teachers',
    db.Column('subject_id', db.String(36), db.ForeignKey('subjects.id', ondelete='CASCADE'), primary_key=True),
    db.Column('teacher_id', db.String(36), db.ForeignKey('teachers.id', ondelete='CASCADE'), primary_key=True),
)


class Subject(db.Model):
    __tablename__ = 'subjects'

    # =====================
    # CORE IDENTIFIERS
    # =====================
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # =====================
    # SUBJECT DETAILS
    # =====================
    name = db.Column(db.String(100), unique=True, nullable=False)   # Mathematics, English

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # =====================
    # RELATIONSHIPS
    # =====================
    teachers = db.relationship(
        'Teacher',
        secondary=subject_teachers,
        back_populates='subjects',
        order_by='Teacher.name'
    )

    # =====================
    # VALIDATION
    # =====================
    @validates('name')
    def validate_name(self, key, value):
        if not value or not value.strip():
            raise ValueError("Subject name is required")
        return value.strip()

    # =====================
    # HELPERS
    # =====================
    @property
    def teacher_names(self):
        return ",".join(teacher.name for teacher in self.teachers)

    def __repr__(self):
        return f"<Subject {self.name}>"
