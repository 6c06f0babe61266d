"""
Demo Data Generation Script for Team Task Manager
Generates team members with realistic names and a spread of tasks across all statuses.

    python -m app.scripts.populate_demo_data [--users 8] [--seed 42] [--reset]
"""
import argparse
import asyncio
import random

from faker import Faker
from sqlalchemy import delete

from app.database import AsyncSessionLocal, init_models
from app.models.tasks import Task, TaskStatus
from app.models.user import User
from app.services import tasks as task_service
from app.services import users as user_service

# Realistic task data organized by business domain
TASK_TEMPLATES = {
    "Software Development": [
        ("User Authentication System", "Implement secure session-based login with role management"),
        ("API Performance Optimization", "Reduce API response times and improve caching"),
        ("Database Migration to PostgreSQL", "Migrate from legacy system to PostgreSQL"),
        ("CI/CD Pipeline Implementation", "Automate testing and deployment workflows"),
        ("Admin Dashboard Development", "Build comprehensive analytics dashboard for admins"),
    ],
    "Marketing": [
        ("Q1 Digital Marketing Campaign", "Launch multi-channel campaign for new product line"),
        ("Email Newsletter Automation", "Set up drip campaigns for customer segments"),
        ("SEO Optimization Project", "Improve organic search rankings for key terms"),
        ("Customer Testimonial Campaign", "Collect and showcase customer success stories"),
    ],
    "Operations": [
        ("Disaster Recovery Plan", "Develop and test comprehensive backup strategy"),
        ("Vendor Management System", "Implement centralized vendor tracking platform"),
        ("IT Asset Management", "Catalog and track all company hardware and licenses"),
        ("Customer Support Portal", "Build self-service knowledge base and ticketing"),
    ],
}

STATUS_WEIGHTS = {
    TaskStatus.UNFINISHED: 0.35,
    TaskStatus.IN_PROGRESS: 0.30,
    TaskStatus.FINISHED: 0.35,
}


def build_demo_team(fake: Faker, rng: random.Random, user_count: int = 8, max_tasks: int = 6) -> list[dict]:
    """
    Plan the demo data without touching the database.
    Returns [{"name": ..., "tasks": [(title, content, status), ...]}, ...] with unique names.
    """
    all_tasks = [t for group in TASK_TEMPLATES.values() for t in group]
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())

    team = []
    used_names = set()
    for _ in range(user_count):
        while True:
            name = fake.name()
            if name not in used_names:
                used_names.add(name)
                break

        # Some members are deliberately left without tasks
        picked = rng.sample(all_tasks, rng.randint(0, min(max_tasks, len(all_tasks))))
        tasks = [(title, content, rng.choices(statuses, weights)[0]) for title, content in picked]
        team.append({"name": name, "tasks": tasks})
    return team


async def clear_existing_data(db):
    """Tasks first, the foreign key points at users"""
    print("Clearing existing data...")
    await db.execute(delete(Task))
    await db.execute(delete(User))
    await db.commit()


async def populate(team: list[dict], reset: bool = False) -> tuple[int, int]:
    await init_models()
    user_count = task_count = 0

    async with AsyncSessionLocal() as db:
        if reset:
            await clear_existing_data(db)

        for member in team:
            user = await user_service.create_user(db, member["name"])
            user_count += 1
            for title, content, status in member["tasks"]:
                await task_service.create_task(db, title, content, status.value, user.id)
                task_count += 1

    return user_count, task_count


def main():
    parser = argparse.ArgumentParser(description="Populate the database with a demo team")
    parser.add_argument("--users", type=int, default=8)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--reset", action="store_true", help="delete all users and tasks first")
    args = parser.parse_args()

    fake = Faker()
    if args.seed is not None:
        Faker.seed(args.seed)
    rng = random.Random(args.seed)

    team = build_demo_team(fake, rng, user_count=args.users)
    users, tasks = asyncio.run(populate(team, reset=args.reset))

    print("\n" + "="*60)
    print("Database populated with demo data")
    print("="*60)
    print(f"   - Users: {users}")
    print(f"   - Tasks: {tasks}")


if __name__ == "__main__":
    main()
