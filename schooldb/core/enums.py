from enum import Enum


class PaymentStatus(str, Enum):
    PAID = "Paid"
    PARTIALLY_PAID = "Partially Paid"
    UNPAID = "Unpaid"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


# School week order used by timetable views
WEEKDAY_ORDER = [d.value for d in DayOfWeek]


class FeeAuditAction(str, Enum):
    CREATE = "CREATE"
    DELETE = "DELETE"
    RECONCILE = "RECONCILE"
