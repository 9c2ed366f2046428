"""Reports router."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from schooldb.db.session import get_db
from schooldb.api.v1.attendance.schemas import AttendanceSummary

from .schemas import PendingFeeItem, ReportCardLine, TeacherTimetableItem, TopStudentItem
from . import service

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/attendance/{student_id}", response_model=AttendanceSummary)
async def get_attendance_summary(student_id: int, db: AsyncSession = Depends(get_db)) -> AttendanceSummary:
    summary = await service.attendance_summary(db, student_id)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No attendance recorded for this student",
        )
    return summary


@router.get("/exams/{exam_id}/top", response_model=List[TopStudentItem])
async def top_students_in_exam(
    exam_id: int,
    limit: int = Query(service.DEFAULT_TOP_N, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> List[TopStudentItem]:
    return await service.top_students_in_exam(db, exam_id, limit=limit)


@router.get("/report-card/{student_id}/{exam_id}", response_model=List[ReportCardLine])
async def student_report_card(
    student_id: int,
    exam_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[ReportCardLine]:
    return await service.student_report_card(db, student_id, exam_id)


@router.get("/pending-fees", response_model=List[PendingFeeItem])
async def students_with_pending_fees(db: AsyncSession = Depends(get_db)) -> List[PendingFeeItem]:
    return await service.students_with_pending_fees(db)


@router.get("/pending-fees/export")
async def export_pending_fees(db: AsyncSession = Depends(get_db)) -> Response:
    content = await service.pending_fees_workbook(db)
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=pending_fees.xlsx"},
    )


@router.get("/teachers/{teacher_id}/timetable", response_model=List[TeacherTimetableItem])
async def teacher_timetable(teacher_id: int, db: AsyncSession = Depends(get_db)) -> List[TeacherTimetableItem]:
    return await service.teacher_timetable(db, teacher_id)
