import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.errors import NotFoundError
from app.models.tasks import Task, TaskStatus
from app.services.unit_of_work import UnitOfWork
from app.services.validation import parse_status, require_id, require_text

logger = logging.getLogger(__name__)


async def get_task(db: AsyncSession, task_id: int) -> Task:
    result = await db.execute(
        select(Task).filter(Task.id == task_id).execution_options(populate_existing=True)
    )
    task = result.scalars().first()
    if not task:
        raise NotFoundError("Task not found")
    return task


async def find_task_for_user(db: AsyncSession, task_id: int, user_id: int) -> Task | None:
    result = await db.execute(
        select(Task)
        .filter(Task.id == task_id, Task.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def create_task(db: AsyncSession, title, content, status=None, user_id=None) -> Task:
    # Validate everything before touching the store
    title = require_text(title, "title")
    content = require_text(content, "content")
    user_id = require_id(user_id, "user", message="Please select a user")
    status = parse_status(status, default=TaskStatus.UNFINISHED)

    new_task = Task(title=title, content=content, status=status, user_id=user_id)

    # The foreign key write is the existence check for the assigned user.
    async with UnitOfWork(db, on_integrity_error=NotFoundError("Assigned user not found"),
                          failure_message="Failed to create task"):
        db.add(new_task)
        await db.flush()

    await db.refresh(new_task)
    logger.info("[TASKS] Created task %s (ID: %s) for user %s", new_task.title, new_task.id, user_id)
    return new_task


async def update_task_status(db: AsyncSession, task_id: int, status) -> Task:
    status = parse_status(status)

    async with UnitOfWork(db, failure_message="Failed to update task status"):
        task = await get_task(db, task_id)
        task.status = status

    return task


async def change_task_status(db: AsyncSession, user_id: int, task_id: int, status) -> Task:
    """
    Set a task's status from a user's page.

    The task must belong to `user_id`; a task id guessed from another user's
    page is reported as not found and left untouched. Any status may follow
    any other, including itself.
    """
    status = parse_status(status)

    async with UnitOfWork(db, failure_message="Failed to update task status"):
        task = await find_task_for_user(db, task_id, user_id)
        if task is None:
            raise NotFoundError("Task not found or does not belong to this user")
        previous = task.status
        task.status = status

    logger.info("[TASKS] Task %s status %s -> %s", task_id, previous.value, status.value)
    return task
