from schooldb.core.models.parent import Parent
from schooldb.core.models.teacher import Teacher
from schooldb.core.models.class_model import SchoolClass
from schooldb.core.models.student import Student
from schooldb.core.models.subject import Subject
from schooldb.core.models.exam import Exam
from schooldb.core.models.mark import Mark
from schooldb.core.models.attendance import Attendance
from schooldb.core.models.timetable import Timetable
from schooldb.core.models.fee import Fee
from schooldb.core.models.payment import Payment
from schooldb.core.models.fee_audit_log import FeeAuditLog

__all__ = [
    "Attendance",
    "Exam",
    "Fee",
    "FeeAuditLog",
    "Mark",
    "Parent",
    "Payment",
    "SchoolClass",
    "Student",
    "Subject",
    "Teacher",
    "Timetable",
]
