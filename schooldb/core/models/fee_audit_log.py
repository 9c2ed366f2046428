"""Fee audit log: immutable financial change tracking."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String

from schooldb.db.session import Base


class FeeAuditLog(Base):
    """Immutable audit trail for fee and payment changes."""

    __tablename__ = "fee_audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, nullable=False, index=True)
    reference_table = Column(String(50), nullable=False)
    reference_id = Column(Integer, nullable=False)
    action_type = Column(String(30), nullable=False)  # CREATE, DELETE, RECONCILE
    old_value = Column(JSON, nullable=True)
    new_value = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
