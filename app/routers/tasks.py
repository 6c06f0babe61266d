from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.schemas.task import TaskCreate, TaskResponse
from app.services import tasks as task_service
from app.services.validation import MAX_ID, MIN_ID

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskCreate, db: AsyncSession = Depends(get_db)):
    return await task_service.create_task(
        db,
        title=task_data.title,
        content=task_data.content,
        status=task_data.status,
        user_id=task_data.user_id,
    )

@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int = Path(..., ge=MIN_ID, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    return await task_service.get_task(db, task_id)
