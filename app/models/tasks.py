import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import User


class TaskStatus(str, enum.Enum):
    UNFINISHED = "UNFINISHED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(
        SQLEnum(TaskStatus, name="task_status", native_enum=False, validate_strings=True, length=20),
        nullable=False,
        default=TaskStatus.UNFINISHED,
        server_default=TaskStatus.UNFINISHED.value,
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship(User, back_populates="tasks")
