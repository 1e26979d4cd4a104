from sqlalchemy import Column, String, Enum, Boolean
from sqlalchemy.orm import relationship
import enum

from skillbridge.core.database import Base


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    TUTOR = "TUTOR"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    # Core user fields
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)  # bcrypt hash
    phone = Column(String(30), nullable=True)
    role = Column(Enum(UserRole), default=UserRole.STUDENT, nullable=False)  # fixed at registration
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    tutor_profile = relationship("TutorProfile", back_populates="user", uselist=False)
    bookings_as_student = relationship("Booking", back_populates="student")
    reviews = relationship("Review", back_populates="student")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
