# api/tasks/db_manager.py
"""
Business logic for pending-task boards.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core import events
from db_models.pending_task import PendingBoard, PendingTask, Importance
from .models import TaskCreate
from . import queries

logger = logging.getLogger(__name__)


class TaskNotFoundError(Exception):
    """Raised when a task doesn't exist on the given board."""
    pass


async def list_tasks(db: AsyncSession, board: PendingBoard) -> list[PendingTask]:
    result = await db.execute(queries.select_tasks_for_board(board.value))
    return list(result.scalars().all())


async def get_task_or_raise(db: AsyncSession, board: PendingBoard, task_id: int) -> PendingTask:
    result = await db.execute(queries.select_task_on_board(board.value, task_id))
    task = result.scalar_one_or_none()
    if task is None:
        raise TaskNotFoundError(f"Task {task_id} not found on board '{board.value}'")
    return task


async def create_task(db: AsyncSession, board: PendingBoard, data: TaskCreate) -> PendingTask:
    task = PendingTask(
        board=board.value,
        title=data.title,
        description=data.description,
        start_date=data.start_date,
        due_date=data.due_date,
        importance=data.importance.value,
        completed=False,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)
    logger.info("Created task %s on board %s", task.id, board.value)
    events.change_feed.publish(events.pending_tasks_resource(board.value))
    return task


async def set_completed(db: AsyncSession, board: PendingBoard, task_id: int, completed: bool) -> PendingTask:
    """
    Raises:
        TaskNotFoundError: If task doesn't exist on board
    """
    task = await get_task_or_raise(db, board, task_id)
    task.completed = completed
    await db.commit()
    await db.refresh(task)
    events.change_feed.publish(events.pending_tasks_resource(board.value))
    return task


async def set_importance(db: AsyncSession, board: PendingBoard, task_id: int, importance: Importance) -> PendingTask:
    """
    Raises:
        TaskNotFoundError: If task doesn't exist on board
    """
    task = await get_task_or_raise(db, board, task_id)
    task.importance = importance.value
    await db.commit()
    await db.refresh(task)
    events.change_feed.publish(events.pending_tasks_resource(board.value))
    return task
