from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db
from app.errors import NotFoundError
from app.schemas.task import TaskResponse, TaskStatusUpdate
from app.schemas.user import (
    UserCreate, UserDeletionResponse, UserDetail, UserListItem, UserResponse, UserUpdate
)
from app.services import tasks as task_service
from app.services import users as user_service
from app.services.analysis import summarize_tasks
from app.services.validation import MAX_ID, MIN_ID

router = APIRouter(prefix="/users", tags=["users"])

@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, db: AsyncSession = Depends(get_db)):
    return await user_service.create_user(db, user.name)

@router.get("/", response_model=list[UserListItem])
async def list_users(
    order_by: str = Query("id", pattern=r"^(id|name)$"),
    db: AsyncSession = Depends(get_db)
):
    users = await user_service.list_users(db, order_by=order_by)
    return [
        UserListItem(
            id=u.id, name=u.name, created_at=u.created_at,
            summary=summarize_tasks(u.tasks)
        )
        for u in users
    ]

@router.get("/{user_id}", response_model=UserDetail)
async def get_user(user_id: int = Path(..., ge=MIN_ID, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    found = await user_service.find_user_with_tasks(db, user_id)
    if found is None:
        raise NotFoundError("User not found")
    user, tasks = found
    return UserDetail(
        id=user.id, name=user.name, created_at=user.created_at,
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        summary=summarize_tasks(tasks),
    )

@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_update: UserUpdate, user_id: int = Path(..., ge=MIN_ID, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    return await user_service.update_user_name(db, user_id, user_update.name)

@router.delete("/{user_id}", response_model=UserDeletionResponse)
async def delete_user(user_id: int = Path(..., ge=MIN_ID, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    return await user_service.delete_user_cascade(db, user_id)

@router.put("/{user_id}/tasks/{task_id}/status", response_model=TaskResponse)
async def change_task_status(
    update: TaskStatusUpdate,
    user_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    task_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    return await task_service.change_task_status(db, user_id, task_id, update.status)
