"""Small builders for test data; all go through the service layer."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.api.v1.fees import service as fee_service
from schooldb.api.v1.fees.schemas import FeeAssign
from schooldb.api.v1.students import service as student_service
from schooldb.api.v1.students.schemas import StudentCreate


async def make_student(db: AsyncSession, first_name: str = "Mary", last_name: str = "Atieno") -> int:
    student = await student_service.add_student(
        db, StudentCreate(first_name=first_name, last_name=last_name, gender="Female")
    )
    return student.student_id


async def make_student_with_fee(db: AsyncSession, amount_due: str = "20000.00", **kwargs) -> int:
    student_id = await make_student(db, **kwargs)
    await fee_service.assign_fee(db, FeeAssign(student_id=student_id, amount_due=Decimal(amount_due)))
    return student_id
