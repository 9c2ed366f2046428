"""
Seed the database with the sample school: parents, teachers, classes, subjects,
students, exams, marks, attendance, fees, payments and timetable.

Fee statuses are not written directly: fees are assigned and payments go
through the ledger, which reconciles each student.

Usage: python -m schooldb.db.seed [--reset]
"""

import argparse
import asyncio
from datetime import date, time
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.logging import get_logger, setup_logging
from schooldb.core.models import (
    Attendance,
    Exam,
    Mark,
    Parent,
    SchoolClass,
    Student,
    Subject,
    Teacher,
    Timetable,
)
from schooldb.db.session import AsyncSessionLocal, Base, engine, init_db
from schooldb.api.v1.fees import service as fee_service
from schooldb.api.v1.fees.schemas import FeeAssign
from schooldb.api.v1.payments import service as payment_service
from schooldb.api.v1.payments.schemas import PaymentCreate

logger = get_logger(__name__)

PARENTS = [
    ("John Mwangi", "0712345678", "johnmwangi@gmail.com", "Nairobi"),
    ("Grace Wambui", "0723456789", "gracewambui@gmail.com", "Mombasa"),
    ("Peter Otieno", "0734567890", "peterotieno@gmail.com", "Kisumu"),
    ("Lucy Njeri", "0745678901", "lucynjeri@gmail.com", "Nakuru"),
    ("James Kiptoo", "0756789012", "jameskiptoo@gmail.com", "Eldoret"),
]

TEACHERS = [
    ("Alice", "Kamau", "alice.kamau@gmail.com", "0700000001", "Mathematics", date(2020, 1, 15)),
    ("Brian", "Odhiambo", "brian.odhiambo@gmail.com", "0700000002", "English", date(2019, 2, 20)),
    ("Catherine", "Cherono", "catherine.cherono@gmail.com", "0700000003", "Biology", date(2021, 3, 10)),
    ("David", "Omondi", "david.omondi@gmail.com", "0700000004", "Chemistry", date(2022, 4, 12)),
    ("Eva", "Mutua", "eva.mutua@gmail.com", "0700000005", "Geography", date(2018, 5, 18)),
]

CLASSES = [
    ("Form 1 Blue", 1),
    ("Form 2 Green", 2),
    ("Form 3 Red", 3),
    ("Form 4 Yellow", 4),
    ("Form 1 White", 5),
]

SUBJECTS = ["Mathematics", "English", "Biology", "Chemistry", "Geography"]

STUDENTS = [
    ("Mary", "Atieno", date(2007, 3, 15), "Female", 1, date(2022, 1, 10), "Kisumu", 1),
    ("John", "Kariuki", date(2006, 6, 22), "Male", 2, date(2021, 1, 10), "Nyeri", 2),
    ("Jane", "Oduor", date(2005, 9, 10), "Female", 3, date(2020, 1, 10), "Kakamega", 3),
    ("Tom", "Njoroge", date(2004, 12, 1), "Male", 4, date(2019, 1, 10), "Nairobi", 4),
    ("Lilian", "Chebet", date(2007, 1, 25), "Female", 5, date(2023, 1, 10), "Eldoret", 5),
]

EXAMS = [
    ("Mid Term 1", "Term 1", 2025),
    ("End Term 1", "Term 1", 2025),
    ("Mid Term 2", "Term 2", 2025),
    ("End Term 2", "Term 2", 2025),
    ("End Year", "Term 3", 2025),
]

MARKS = [
    (1, 1, 1, Decimal("78.5"), "B+", "Good job"),
    (2, 2, 2, Decimal("65.0"), "B", "Fair"),
    (3, 3, 3, Decimal("92.0"), "A", "Excellent"),
    (4, 4, 4, Decimal("54.5"), "C", "Needs improvement"),
    (5, 5, 5, Decimal("88.0"), "A-", "Very good"),
]

ATTENDANCE = [
    (1, date(2025, 5, 1), "Present"),
    (2, date(2025, 5, 1), "Absent"),
    (3, date(2025, 5, 1), "Present"),
    (4, date(2025, 5, 1), "Late"),
    (5, date(2025, 5, 1), "Present"),
]

FEES = [(student_id, Decimal("20000.00")) for student_id in range(1, 6)]

PAYMENTS = [
    (1, Decimal("15000.00"), date(2025, 3, 10)),
    (2, Decimal("20000.00"), date(2025, 3, 11)),
    (4, Decimal("5000.00"), date(2025, 3, 15)),
    (5, Decimal("10000.00"), date(2025, 3, 18)),
    (5, Decimal("10000.00"), date(2025, 3, 25)),
]

TIMETABLE = [
    (1, 1, 1, "Monday", time(8, 0), time(9, 30)),
    (2, 2, 2, "Tuesday", time(9, 30), time(11, 0)),
    (3, 3, 3, "Wednesday", time(8, 0), time(9, 30)),
    (4, 4, 4, "Thursday", time(9, 30), time(11, 0)),
    (5, 5, 5, "Friday", time(8, 0), time(9, 30)),
]


async def seed_school(db: AsyncSession) -> None:
    """Insert the sample records. Expects empty tables."""
    existing = (await db.execute(select(Student.student_id).limit(1))).scalar_one_or_none()
    if existing is not None:
        logger.info("Students already present; skipping seed")
        return

    for name, phone, email, address in PARENTS:
        db.add(Parent(name=name, phone=phone, email=email, address=address))
    for first, last, email, phone, subject, hired in TEACHERS:
        db.add(Teacher(first_name=first, last_name=last, email=email, phone=phone, subject=subject, hire_date=hired))
    await db.flush()
    for class_name, teacher_id in CLASSES:
        db.add(SchoolClass(class_name=class_name, class_teacher_id=teacher_id))
    for subject_name in SUBJECTS:
        db.add(Subject(subject_name=subject_name))
    await db.flush()
    for first, last, dob, gender, class_id, admitted, address, parent_id in STUDENTS:
        db.add(
            Student(
                first_name=first,
                last_name=last,
                dob=dob,
                gender=gender,
                class_id=class_id,
                admission_date=admitted,
                address=address,
                parent_id=parent_id,
                is_active=True,
            )
        )
    for exam_name, term, year in EXAMS:
        db.add(Exam(exam_name=exam_name, term=term, year=year))
    await db.flush()
    for student_id, subject_id, exam_id, marks, grade, remarks in MARKS:
        db.add(
            Mark(
                student_id=student_id,
                subject_id=subject_id,
                exam_id=exam_id,
                marks_obtained=marks,
                grade=grade,
                remarks=remarks,
            )
        )
    for student_id, day, status in ATTENDANCE:
        db.add(Attendance(student_id=student_id, date=day, status=status))
    for class_id, subject_id, teacher_id, day, start, end in TIMETABLE:
        db.add(
            Timetable(
                class_id=class_id,
                subject_id=subject_id,
                teacher_id=teacher_id,
                day_of_week=day,
                start_time=start,
                end_time=end,
            )
        )
    await db.commit()

    for student_id, amount_due in FEES:
        await fee_service.assign_fee(db, FeeAssign(student_id=student_id, amount_due=amount_due))
    for student_id, amount, paid_on in PAYMENTS:
        await payment_service.record_payment(
            db, PaymentCreate(student_id=student_id, amount=amount, payment_date=paid_on)
        )
    logger.info(
        "Seeded %d students, %d fee records, %d payments",
        len(STUDENTS), len(FEES), len(PAYMENTS),
    )


async def run(reset: bool = False) -> None:
    if reset:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_school(session)
    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Load the sample school into the database.")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    setup_logging()
    asyncio.run(run(reset=args.reset))


if __name__ == "__main__":
    main()
