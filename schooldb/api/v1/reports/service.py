"""Read-only reports over current store state: attendance, exam ranking, report card, fees, timetable."""

import io
from decimal import Decimal
from typing import List, Optional

from openpyxl import Workbook
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.core.enums import AttendanceStatus, PaymentStatus
from schooldb.core.models import (
    Attendance,
    Fee,
    Mark,
    SchoolClass,
    Student,
    Subject,
    Timetable,
)
from schooldb.api.v1.attendance.schemas import AttendanceSummary
from schooldb.api.v1.fees.service import to_money
from schooldb.api.v1.timetable.service import weekday_sort_key

from .schemas import PendingFeeItem, ReportCardLine, TeacherTimetableItem, TopStudentItem

PENDING_FEES_HEADERS = ("student_id", "student_name", "amount_due", "amount_paid", "balance")
DEFAULT_TOP_N = 5


async def attendance_summary(db: AsyncSession, student_id: int) -> Optional[AttendanceSummary]:
    """Day counts per status. None when the student has no attendance rows."""
    rows = (
        await db.execute(
            select(Attendance.status, func.count(Attendance.attendance_id))
            .where(Attendance.student_id == student_id)
            .group_by(Attendance.status)
        )
    ).all()
    if not rows:
        return None
    counts = {status: int(n) for status, n in rows}
    total = sum(counts.values())
    present = counts.get(AttendanceStatus.PRESENT.value, 0)
    return AttendanceSummary(
        student_id=student_id,
        total_days=total,
        days_present=present,
        days_absent=counts.get(AttendanceStatus.ABSENT.value, 0),
        days_late=counts.get(AttendanceStatus.LATE.value, 0),
        attendance_rate=round(present / total, 4),
    )


async def top_students_in_exam(db: AsyncSession, exam_id: int, limit: int = DEFAULT_TOP_N) -> List[TopStudentItem]:
    """Highest average marks first; equal averages fall back to student_id ascending."""
    avg_marks = func.avg(Mark.marks_obtained).label("average_marks")
    stmt = (
        select(Student.student_id, Student.first_name, Student.last_name, avg_marks)
        .select_from(Mark)
        .join(Student, Student.student_id == Mark.student_id)
        .where(Mark.exam_id == exam_id)
        .group_by(Student.student_id, Student.first_name, Student.last_name)
        .order_by(avg_marks.desc(), Student.student_id.asc())
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()
    return [
        TopStudentItem(
            student_id=sid,
            student_name=f"{first} {last}",
            average_marks=to_money(avg),
        )
        for sid, first, last, avg in rows
    ]


async def student_report_card(db: AsyncSession, student_id: int, exam_id: int) -> List[ReportCardLine]:
    stmt = (
        select(
            Student.first_name,
            Student.last_name,
            SchoolClass.class_name,
            Subject.subject_name,
            Mark.marks_obtained,
            Mark.grade,
            Mark.remarks,
        )
        .select_from(Mark)
        .join(Student, Mark.student_id == Student.student_id)
        .join(Subject, Mark.subject_id == Subject.subject_id)
        .outerjoin(SchoolClass, Student.class_id == SchoolClass.class_id)
        .where(Mark.student_id == student_id, Mark.exam_id == exam_id)
        .order_by(Subject.subject_name)
    )
    rows = (await db.execute(stmt)).all()
    return [
        ReportCardLine(
            first_name=first,
            last_name=last,
            class_name=class_name,
            subject_name=subject_name,
            marks_obtained=to_money(marks),
            grade=grade,
            remarks=remarks,
        )
        for first, last, class_name, subject_name, marks, grade, remarks in rows
    ]


async def students_with_pending_fees(db: AsyncSession) -> List[PendingFeeItem]:
    stmt = (
        select(Fee, Student.first_name, Student.last_name)
        .select_from(Fee)
        .join(Student, Fee.student_id == Student.student_id)
        .where(Fee.payment_status != PaymentStatus.PAID.value)
        .order_by(Fee.student_id)
    )
    items = []
    for fee, first, last in (await db.execute(stmt)).all():
        due = to_money(fee.amount_due)
        paid = to_money(fee.amount_paid)
        items.append(
            PendingFeeItem(
                student_id=fee.student_id,
                student_name=f"{first} {last}",
                amount_due=due,
                amount_paid=paid,
                balance=due - paid,
            )
        )
    return items


async def pending_fees_workbook(db: AsyncSession) -> bytes:
    """Outstanding-fees report as an .xlsx download."""
    items = await students_with_pending_fees(db)
    wb = Workbook()
    ws = wb.active
    ws.title = "Pending fees"
    ws.append(list(PENDING_FEES_HEADERS))
    total_balance = Decimal("0.00")
    for it in items:
        ws.append([it.student_id, it.student_name, float(it.amount_due), float(it.amount_paid), float(it.balance)])
        total_balance += it.balance
    ws.append([None, "TOTAL", None, None, float(total_balance)])
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


async def teacher_timetable(db: AsyncSession, teacher_id: int) -> List[TeacherTimetableItem]:
    stmt = (
        select(
            Timetable.day_of_week,
            Timetable.start_time,
            Timetable.end_time,
            SchoolClass.class_name,
            Subject.subject_name,
        )
        .select_from(Timetable)
        .join(SchoolClass, Timetable.class_id == SchoolClass.class_id)
        .join(Subject, Timetable.subject_id == Subject.subject_id)
        .where(Timetable.teacher_id == teacher_id)
        .order_by(weekday_sort_key(Timetable.day_of_week), Timetable.start_time)
    )
    rows = (await db.execute(stmt)).all()
    return [
        TeacherTimetableItem(
            day_of_week=day,
            start_time=start,
            end_time=end,
            class_name=class_name,
            subject_name=subject_name,
        )
        for day, start, end, class_name, subject_name in rows
    ]
