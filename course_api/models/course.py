"""Course model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from course_api.database import Base


class Course(Base):
    """Represents a course listed by its owning user."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    estimated_time = Column(String)
    materials_needed = Column(Text)
    # References users.id without a constraint; an unknown owner shows the placeholder instructor.
    user_id = Column(Integer, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
