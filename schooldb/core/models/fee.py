"""Fee record: one outstanding-balance row per student. amount_paid and payment_status are derived."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from schooldb.core.enums import PaymentStatus
from schooldb.db.session import Base


class Fee(Base):
    """
    Amount due per student. amount_paid and payment_status are written only by
    reconciliation, never directly by callers.
    """

    __tablename__ = "fees"
    __table_args__ = (
        CheckConstraint("amount_due >= 0", name="chk_fee_amount_due"),
        CheckConstraint("amount_paid >= 0", name="chk_fee_amount_paid"),
        CheckConstraint(
            "payment_status IN ('Paid','Partially Paid','Unpaid')",
            name="chk_fee_payment_status",
        ),
    )

    fee_id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer,
        ForeignKey("students.student_id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )
    amount_due = Column(Numeric(10, 2), nullable=False)
    amount_paid = Column(Numeric(10, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.UNPAID.value)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    student = relationship("Student")
