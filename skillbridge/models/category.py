from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from skillbridge.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    name = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(String(500), nullable=True)

    # Relationships
    bookings = relationship("Booking", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, name={self.name})>"
