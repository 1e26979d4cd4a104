from sqlalchemy import Column, String, DateTime, Integer, Float, ForeignKey, Text, Enum, Uuid, Index
from sqlalchemy.orm import relationship
import enum

from skillbridge.core.database import Base


class BookingStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    __tablename__ = "bookings"

    # Participants
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    tutor_id = Column(Uuid(as_uuid=True), ForeignKey("tutor_profiles.id"), nullable=False)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=False)

    # Session details
    subject = Column(String(100), nullable=False)
    session_date = Column(DateTime(timezone=True), nullable=False)  # UTC
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)

    # Status and payment
    status = Column(Enum(BookingStatus), default=BookingStatus.CONFIRMED, nullable=False)
    payment_method = Column(String(50), nullable=True)  # recorded only, never charged

    # Relationships
    student = relationship("User", back_populates="bookings_as_student")
    tutor = relationship("TutorProfile", back_populates="bookings")
    category = relationship("Category", back_populates="bookings")
    review = relationship("Review", back_populates="booking", uselist=False)

    __table_args__ = (
        Index("idx_bookings_student_date", "student_id", "session_date"),
        Index("idx_bookings_tutor_date", "tutor_id", "session_date"),
    )

    def __repr__(self):
        return f"<Booking(student_id={self.student_id}, tutor_id={self.tutor_id}, session_date={self.session_date}, status={self.status})>"
