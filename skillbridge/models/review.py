from sqlalchemy import Column, Integer, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship

from skillbridge.core.database import Base


class Review(Base):
    __tablename__ = "reviews"

    # One review per booking, enforced by the unique constraint
    booking_id = Column(Uuid(as_uuid=True), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Copied from the booking
    tutor_id = Column(Uuid(as_uuid=True), ForeignKey("tutor_profiles.id"), nullable=False, index=True)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    # Relationships
    booking = relationship("Booking", back_populates="review")
    tutor = relationship("TutorProfile", back_populates="reviews")
    student = relationship("User", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    def __repr__(self):
        return f"<Review(booking_id={self.booking_id}, tutor_id={self.tutor_id}, rating={self.rating})>"
