import logging

from sqlalchemy import delete
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import ConflictError, NotFoundError
from app.models.tasks import Task, TaskStatus
from app.models.user import User
from app.schemas.user import UserDeletionResponse
from app.services.unit_of_work import UnitOfWork
from app.services.validation import require_text

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A user with this name already exists"


async def find_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def find_user_with_tasks(db: AsyncSession, user_id: int) -> tuple[User, list[Task]] | None:
    # populate_existing: always reflect the store, not what this session cached
    result = await db.execute(
        select(User)
        .filter(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalars().first()
    if user is None:
        return None

    result = await db.execute(
        select(Task)
        .filter(Task.user_id == user_id)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .execution_options(populate_existing=True)
    )
    return user, list(result.scalars().all())


async def list_users(db: AsyncSession, order_by: str = "id") -> list[User]:
    ordering = User.name if order_by == "name" else User.id
    result = await db.execute(
        select(User)
        .options(selectinload(User.tasks))
        .order_by(ordering)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def create_user(db: AsyncSession, name) -> User:
    name = require_text(name, "name")

    new_user = User(name=name)
    async with UnitOfWork(db, on_integrity_error=ConflictError(DUPLICATE_NAME),
                          failure_message="Failed to create user"):
        db.add(new_user)
        await db.flush()

    await db.refresh(new_user)
    logger.info("[USERS] Created user %s (ID: %s)", new_user.name, new_user.id)
    return new_user


async def update_user_name(db: AsyncSession, user_id: int, name) -> User:
    name = require_text(name, "name")

    async with UnitOfWork(db, on_integrity_error=ConflictError(DUPLICATE_NAME),
                          failure_message="Failed to update user"):
        user = await find_user_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.name = name
        await db.flush()

    logger.info("[USERS] Renamed user %s to %s", user_id, name)
    return user


async def _delete_tasks_of(db: AsyncSession, user_id: int) -> None:
    await db.execute(delete(Task).where(Task.user_id == user_id))


async def _delete_user_row(db: AsyncSession, user_id: int) -> None:
    await db.execute(delete(User).where(User.id == user_id))


async def delete_user_cascade(db: AsyncSession, user_id: int) -> UserDeletionResponse:
    """
    Delete a user and every task they own as one atomic unit.

    Tasks go first so the foreign key holds at every point of the
    transaction. If any step fails nothing is removed.
    """
    if await find_user_by_id(db, user_id) is None:
        raise NotFoundError("User not found")

    async with UnitOfWork(db, failure_message="Failed to delete user"):
        # Re-read inside the unit: the user may have gone since the check above.
        found = await find_user_with_tasks(db, user_id)
        if found is None:
            raise NotFoundError("User not found")
        user, tasks = found

        deletion = UserDeletionResponse(
            user_id=user.id,
            name=user.name,
            deleted_task_ids=[t.id for t in tasks],
            deleted_counts={s.value: sum(1 for t in tasks if t.status == s) for s in TaskStatus},
        )

        if tasks:
            await _delete_tasks_of(db, user_id)
        await _delete_user_row(db, user_id)

    logger.info(
        "[USERS] Deleted user %s (ID: %s) with %d task(s)",
        deletion.name, deletion.user_id, len(deletion.deleted_task_ids),
    )
    return deletion
