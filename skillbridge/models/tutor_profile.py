from sqlalchemy import Column, Text, Integer, Float, ForeignKey, JSON, Uuid, CheckConstraint
from sqlalchemy.orm import relationship

from skillbridge.core.database import Base


class TutorProfile(Base):
    __tablename__ = "tutor_profiles"

    # Foreign key to user
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # Profile information
    bio = Column(Text, nullable=True)
    hourly_rate = Column(Float, nullable=True)  # unset until the tutor fills in the profile
    subjects = Column(JSON, nullable=False, default=list)  # list of subject strings
    qualifications = Column(Text, nullable=True)
    experience = Column(Integer, nullable=False, default=0)  # years

    # Derived from the review set, only written by ReviewService
    rating = Column(Float, nullable=False, default=0)
    total_reviews = Column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship("User", back_populates="tutor_profile")
    availability = relationship(
        "Availability",
        back_populates="tutor",
        cascade="all, delete-orphan",
        order_by="[Availability.day_of_week, Availability.start_time]",
    )
    bookings = relationship("Booking", back_populates="tutor")
    reviews = relationship("Review", back_populates="tutor", order_by="Review.created_at.desc()")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_tutor_profiles_rating_range"),
        CheckConstraint("total_reviews >= 0", name="ck_tutor_profiles_total_reviews"),
    )

    def __repr__(self):
        return f"<TutorProfile(user_id={self.user_id}, rating={self.rating}, total_reviews={self.total_reviews})>"
