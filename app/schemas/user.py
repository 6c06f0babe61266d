from pydantic import BaseModel, Field
from datetime import datetime
from app.schemas.task import TaskResponse


class UserCreate(BaseModel):
    name: str | None = None


class UserUpdate(BaseModel):
    name: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class TaskSummary(BaseModel):
    total_tasks: int = 0
    status_counts: dict[str, int] = Field(default_factory=dict)
    completion_percentage: float = 0.0


class UserListItem(UserResponse):
    summary: TaskSummary


class UserDetail(UserResponse):
    tasks: list[TaskResponse] = []
    summary: TaskSummary


class UserDeletionResponse(BaseModel):
    user_id: int
    name: str
    deleted_task_ids: list[int] = []
    deleted_counts: dict[str, int] = Field(default_factory=dict)

    class Config:
        from_attributes = True
