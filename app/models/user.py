from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a user goes through services.users.delete_user_cascade, not ORM cascades.
    tasks = relationship(
        "Task",
        back_populates="user",
        order_by="[Task.created_at.desc(), Task.id.desc()]",
        passive_deletes="all",
    )
