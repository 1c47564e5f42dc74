"""
Pickup schedule models: recurring weekly slots, one-off date overrides,
and reusable templates of weekly slots.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)

from hostel_laundry.models.base import BaseModel, TimestampModel, Weekday, enum_values


def _weekday_type(name: str) -> Enum:
    return Enum(Weekday, name=name, values_callable=enum_values, native_enum=False, length=16)


class LaundrySchedule(TimestampModel):
    """Recurring day-of-week pickup window for a block and floor"""

    __tablename__ = "laundry_schedules"

    block = Column(String(10), nullable=False, index=True)
    floor_number = Column(Integer, nullable=False)
    scheduled_day = Column(_weekday_type("laundry_schedule_day"), nullable=False)
    pickup_time = Column(Time, nullable=False)
    dropoff_start_time = Column(Time, nullable=True)
    dropoff_end_time = Column(Time, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    max_batches_per_day = Column(Integer, nullable=False, default=50)

    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)


class DateSchedule(TimestampModel):
    """Override of the weekly schedule for one calendar date"""

    __tablename__ = "date_schedules"
    __table_args__ = (
        UniqueConstraint("block", "floor_number", "schedule_date", name="uq_date_schedule_slot"),
    )

    block = Column(String(10), nullable=False, index=True)
    floor_number = Column(Integer, nullable=False)
    schedule_date = Column(Date, nullable=False, index=True)
    pickup_time = Column(Time, nullable=False)
    dropoff_start_time = Column(Time, nullable=True)
    dropoff_end_time = Column(Time, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_holiday = Column(Boolean, nullable=False, default=False)
    holiday_name = Column(String(255), nullable=True)
    max_batches_per_day = Column(Integer, nullable=False, default=50)
    notes = Column(Text, nullable=True)

    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)


class ScheduleTemplate(TimestampModel):
    """Named set of weekly slots that can be stamped onto any block and floor"""

    __tablename__ = "schedule_templates"

    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(36), nullable=True)


class TemplateSchedule(BaseModel):
    __tablename__ = "template_schedules"

    template_id = Column(String(36), ForeignKey("schedule_templates.id"), nullable=False, index=True)
    scheduled_day = Column(_weekday_type("template_schedule_day"), nullable=False)
    pickup_time = Column(Time, nullable=False)
    dropoff_start_time = Column(Time, nullable=True)
    dropoff_end_time = Column(Time, nullable=True)
