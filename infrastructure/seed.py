"""Populate the database with a sample set of tasks and tags.

Run with ``python -m infrastructure.seed``. Existing tasks and tags are
removed first. Tasks are written through the domain services so that order
indexes and tag resolution follow the same rules as the API.
"""

import asyncio
import logging
from datetime import timedelta
from typing import List, Tuple

from domain.services.tag_service import TagService
from domain.services.task_service import TaskService
from infrastructure.models.associations import task_tags
from infrastructure.models.base import Base, utcnow
from infrastructure.models.tag_orm import TagORM
from infrastructure.models.task_orm import TaskORM
from infrastructure.repositories.sqlalchemy_tag_repository import (
    SqlAlchemyTagRepository,
)
from infrastructure.repositories.sqlalchemy_task_repository import (
    SqlAlchemyTaskRepository,
)
from sqlalchemy import delete
from sqlalchemy.orm import Session
from utils.dependencies import SessionLocal, engine

logger = logging.getLogger(__name__)

TAG_COLORS = [
    "red", "orange", "amber", "yellow", "lime", "green",
    "emerald", "teal", "cyan", "sky", "blue", "indigo",
    "violet", "purple", "fuchsia", "pink", "rose", "slate",
]

# (title, description, priority, completed, due in days, tags)
SAMPLE_TASKS: List[Tuple[str, str, int, bool, int, List[str]]] = [
    ("Complete project proposal", "Write and submit the quarterly project proposal to management", 1, False, 2, ["work", "urgent"]),
    ("Buy groceries", "Get milk, bread, eggs, and vegetables for the week", 2, False, 1, ["home", "shopping"]),
    ("Review React documentation", "Study the latest React 18 features and concurrent rendering", 2, True, -1, ["study", "development"]),
    ("Schedule dentist appointment", "Book an appointment for teeth cleaning", 3, False, 7, ["health", "personal"]),
    ("Prepare presentation slides", "Create slides for the monthly team meeting", 1, False, 3, ["work", "presentation"]),
    ("Update portfolio website", "Add recent projects and update skills section", 2, False, 10, ["personal", "development"]),
    ("Clean the garage", "Organize tools and dispose of unused items", 3, False, 5, ["home", "cleaning"]),
    ("Plan vacation itinerary", "Research and book activities for summer vacation", 2, False, 21, ["personal", "travel"]),
    ("Fix leaky faucet", "Replace washers in the kitchen sink faucet", 1, True, -3, ["home", "maintenance"]),
    ("Submit expense reports", "Compile and submit Q3 expense reports to accounting", 1, False, 1, ["work", "finance"]),
    ("Call Mom", "Check in with Mom and see how she's doing", 2, True, 0, ["family", "personal"]),
    ("Update team wiki", "Add documentation for the new API endpoints", 2, False, 7, ["work", "documentation"]),
    ("Exercise routine", "Go to the gym and complete cardio + strength training", 2, False, 0, ["health", "fitness"]),
    ("Read 'Clean Code' book", "Continue reading chapter 5 about formatting", 3, False, 30, ["study", "development"]),
    ("Backup computer files", "Create backup of important documents and photos", 2, False, 3, ["personal", "maintenance"]),
    ("Attend team standup", "Daily standup meeting with the development team", 1, True, -1, ["work", "meeting"]),
    ("Setup CI/CD pipeline", "Configure automated testing and deployment for the project", 1, False, 5, ["work", "devops"]),
    ("Practice guitar", "Learn the new song from sheet music", 3, False, 7, ["hobby", "music"]),
    ("Update dependencies", "Upgrade packages to latest stable versions", 2, False, 6, ["work", "maintenance"]),
    ("Water the plants", "Water all indoor and outdoor plants", 3, True, -1, ["home", "gardening"]),
    ("Write unit tests", "Add test coverage for user authentication module", 1, False, 3, ["work", "testing"]),
    ("Optimize database queries", "Analyze and improve slow database operations", 1, False, 5, ["work", "performance"]),
    ("Plan monthly budget", "Review expenses and set budget for next month", 2, False, 5, ["finance", "personal"]),
]


def clear_data(db_session: Session) -> None:
    db_session.execute(delete(task_tags))
    db_session.execute(delete(TaskORM))
    db_session.execute(delete(TagORM))
    db_session.commit()
    logger.info("Cleared existing tasks and tags")


async def seed(db_session: Session) -> int:
    """Insert the sample tags and tasks.

    Args:
        db_session (Session): Session used for every write.

    Returns:
        int: Number of tasks created.
    """
    tag_service = TagService(SqlAlchemyTagRepository())
    task_service = TaskService(SqlAlchemyTaskRepository())

    tag_names: List[str] = []
    for _, _, _, _, _, names in SAMPLE_TASKS:
        for name in names:
            if name not in tag_names:
                tag_names.append(name)

    for index, name in enumerate(tag_names):
        await tag_service.create_tag(
            db_session, name=name, color=TAG_COLORS[index % len(TAG_COLORS)]
        )
    logger.info(f"Created {len(tag_names)} tags")

    now = utcnow().replace(microsecond=0)
    for title, description, priority, completed, due_in_days, names in SAMPLE_TASKS:
        task = await task_service.create_task(
            db_session,
            title=title,
            description=description,
            priority=priority,
            due_date=now + timedelta(days=due_in_days),
            tags=names,
        )
        if completed:
            await task_service.toggle_task(db_session, task.id)

    logger.info(f"Created {len(SAMPLE_TASKS)} tasks")
    return len(SAMPLE_TASKS)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db_session = SessionLocal()
    try:
        clear_data(db_session)
        asyncio.run(seed(db_session))
    finally:
        db_session.close()


if __name__ == "__main__":
    main()
