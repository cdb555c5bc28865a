"""SQLAlchemy ORM models for FollowAlong."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class WorkoutSession(Base):
    """One follow-along pass through a workout timeline."""

    __tablename__ = "workout_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    workout_id = Column(String(128), nullable=True)
    workout_name = Column(String(255), nullable=True)
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)
    segments_total = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<WorkoutSession id={self.id} workout={self.workout_id} "
            f"completed={self.completed}>"
        )
