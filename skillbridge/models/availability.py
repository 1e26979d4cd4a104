from sqlalchemy import Column, String, Integer, ForeignKey, Uuid, CheckConstraint, Index
from sqlalchemy.orm import relationship

from skillbridge.core.database import Base


class Availability(Base):
    """Recurring weekly window in which a tutor takes sessions"""
    __tablename__ = "availability"

    # Foreign key to tutor profile
    tutor_id = Column(Uuid(as_uuid=True), ForeignKey("tutor_profiles.id", ondelete="CASCADE"), nullable=False)

    # Weekly window, 0 = Sunday
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM

    # Relationships
    tutor = relationship("TutorProfile", back_populates="availability")

    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day_of_week"),
        Index("idx_availability_tutor_day", "tutor_id", "day_of_week"),
    )

    def __repr__(self):
        return f"<Availability(tutor_id={self.tutor_id}, day_of_week={self.day_of_week}, {self.start_time}-{self.end_time})>"
