# models/__init__.py
from .teacher import Teacher
from .student import Student
from .class_model import Class
from .subject import Subject, subject_teachers

__all__ = ['Teacher', 'Student', 'Class', 'Subject', 'subject_teachers']
