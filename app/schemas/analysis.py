from app.schemas.user import TaskSummary


class TeamSummary(TaskSummary):
    total_users: int
    active_users: int
    avg_tasks_per_user: int


class UserStats(TaskSummary):
    user_id: int
    name: str
