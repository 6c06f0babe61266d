from pydantic import BaseModel
from datetime import datetime
from app.models.tasks import TaskStatus


# Request bodies stay loose on purpose: blank and missing fields are
# rejected by app.services.validation with a message naming the field.

class TaskCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    status: str | None = None
    user_id: int | str | None = None


class TaskStatusUpdate(BaseModel):
    status: str | None = None


class TaskResponse(BaseModel):
    id: int
    title: str
    content: str
    status: TaskStatus
    user_id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True
