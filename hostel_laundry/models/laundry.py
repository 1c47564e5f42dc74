"""
Laundry batch model.
"""

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, String, Text

from hostel_laundry.models.base import BatchStatus, TimestampModel, enum_values


class LaundryBatch(TimestampModel):
    """One laundry cycle for one student, from scheduling to pickup"""

    __tablename__ = "laundry_batches"

    student_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    batch_number = Column(String(32), nullable=False, unique=True, index=True)
    status = Column(
        Enum(BatchStatus, name="batch_status", values_callable=enum_values, native_enum=False, length=32),
        nullable=False,
        default=BatchStatus.SCHEDULED,
        index=True,
    )
    scheduled_date = Column(Date, nullable=False)

    # Stamped only by the matching status transition
    dropped_off_at = Column(DateTime, nullable=True)
    ready_at = Column(DateTime, nullable=True)
    picked_up_at = Column(DateTime, nullable=True)

    staff_notes = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<LaundryBatch(batch_number={self.batch_number}, status={self.status})>"
