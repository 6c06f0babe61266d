import pandas as pd
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.tasks import Task as TaskModel, TaskStatus
from app.models.user import User as UserModel

STATUS_COLUMNS = [s.value for s in TaskStatus]


async def get_task_dataframe(db: AsyncSession) -> pd.DataFrame:
    """One row per (user, task); users without tasks get a row with no task."""
    result = await db.execute(
        select(
            UserModel.id.label("user_id"), UserModel.name,
            TaskModel.id.label("task_id"), TaskModel.status
        )
        .outerjoin(TaskModel, TaskModel.user_id == UserModel.id)
        .order_by(UserModel.id)
    )
    rows = result.all()

    if not rows:
        return pd.DataFrame(columns=["user_id", "name", "task_id", "status"])

    data = []
    for row in rows:
        data.append({
            "user_id": row.user_id,
            "name": row.name,
            "task_id": row.task_id,
            "status": row.status.value if row.status is not None else None,
        })

    return pd.DataFrame(data)


def completion_percentage(finished: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(finished / total * 100.0, 1)


def status_counts(df: pd.DataFrame) -> dict[str, int]:
    counts = df["status"].dropna().value_counts()
    return {s: int(counts.get(s, 0)) for s in STATUS_COLUMNS}


def per_user_stats(df: pd.DataFrame) -> list[dict]:
    if df.empty:
        return []

    users = df[["user_id", "name"]].drop_duplicates().set_index("user_id")
    tasks = df.dropna(subset=["task_id"])
    table = pd.crosstab(tasks["user_id"], tasks["status"]) if not tasks.empty else pd.DataFrame()
    table = table.reindex(index=users.index, columns=STATUS_COLUMNS, fill_value=0)

    stats = []
    for user_id, row in table.iterrows():
        counts = {s: int(row[s]) for s in STATUS_COLUMNS}
        total = sum(counts.values())
        stats.append({
            "user_id": int(user_id),
            "name": users.loc[user_id, "name"],
            "total_tasks": total,
            "status_counts": counts,
            "completion_percentage": completion_percentage(counts[TaskStatus.FINISHED.value], total),
        })
    return stats


def team_summary(df: pd.DataFrame) -> dict:
    if df.empty:
        return {
            "total_users": 0,
            "total_tasks": 0,
            "active_users": 0,
            "avg_tasks_per_user": 0,
            "status_counts": {s: 0 for s in STATUS_COLUMNS},
            "completion_percentage": 0.0,
        }

    tasks_per_user = df.groupby("user_id")["task_id"].count()
    total_users = int(tasks_per_user.size)
    total_tasks = int(tasks_per_user.sum())
    counts = status_counts(df)

    return {
        "total_users": total_users,
        "total_tasks": total_tasks,
        "active_users": int((tasks_per_user > 0).sum()),
        # Whole tasks per member, half rounds up
        "avg_tasks_per_user": int(total_tasks / total_users + 0.5),
        "status_counts": counts,
        "completion_percentage": completion_percentage(counts[TaskStatus.FINISHED.value], total_tasks),
    }


async def team_stats(db: AsyncSession) -> dict:
    df = await get_task_dataframe(db)
    return team_summary(df)


async def user_stats(db: AsyncSession) -> list[dict]:
    df = await get_task_dataframe(db)
    return per_user_stats(df)


def summarize_tasks(tasks) -> dict:
    """Status counts and completion for an already-loaded list of tasks."""
    counts = {s: 0 for s in STATUS_COLUMNS}
    for t in tasks:
        counts[t.status.value] += 1
    total = len(tasks)
    return {
        "total_tasks": total,
        "status_counts": counts,
        "completion_percentage": completion_percentage(counts[TaskStatus.FINISHED.value], total),
    }
