from app import create_app
from extensions import db
from models.class_model import Class
from models.teacher import Teacher
from models.student import Student
from models.subject import Subject

TEACHERS = [
    ("John", "Doe", "john.doe@school.test"),
    ("Mary", "Major", "mary.major@school.test"),
    ("Ade", "Bello", "ade.bello@school.test"),
]

SUBJECTS = ["Mathematics", "English", "Physics", "Chemistry", "Biology", "History", "Geography"]


def seed():
    app = create_app()

    with app.app_context():
        db.drop_all()
        db.create_all()

        teachers = [Teacher(name=name, surname=surname, email=email) for name, surname, email in TEACHERS]
        db.session.add_all(teachers)

        for index, name in enumerate(SUBJECTS):
            db.session.add(Subject(name=name, teachers=[teachers[index % len(teachers)]]))

        classes = []
        for grade in range(1, 7):
            for stream in "AB":
                class_obj = Class(
                    name=f"{grade}{stream}",
                    capacity=20,
                    supervisor=teachers[grade % len(teachers)]
                )
                classes.append(class_obj)
        db.session.add_all(classes)

        for index in range(30):
            db.session.add(Student(
                name=f"Student{index + 1}",
                surname="Jane",
                class_=classes[index % len(classes)]
            ))

        db.session.commit()

        app.logger.info(
            f"[SEED] {len(teachers)} teachers, {len(SUBJECTS)} subjects, "
            f"{len(classes)} classes, 30 students"
        )


if __name__ == '__main__':
    seed()
