"""
User account model.

Students, staff and admins share one table; the location columns are
only meaningful for students.
"""

from sqlalchemy import Boolean, Column, Enum, Integer, String

from hostel_laundry.models.base import TimestampModel, UserRole, enum_values


class User(TimestampModel):
    """Hostel resident or laundry staff member"""

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=enum_values, native_enum=False, length=16),
        nullable=False,
        default=UserRole.STUDENT,
    )

    block = Column(String(10), nullable=True, index=True)
    floor_number = Column(Integer, nullable=True)
    room_number = Column(String(20), nullable=True)
    phone = Column(String(20), nullable=True)

    # Delivery preferences
    email_notifications = Column(Boolean, nullable=False, default=True)
    sms_notifications = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
