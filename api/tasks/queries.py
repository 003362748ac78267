# api/tasks/queries.py
"""
SQLAlchemy query builders for pending-task boards.
"""
from sqlalchemy import select

from db_models.pending_task import PendingTask


def select_tasks_for_board(board: str):
    """Tasks on a board, newest first."""
    return (
        select(PendingTask)
        .where(PendingTask.board == board)
        .order_by(PendingTask.created_at.desc(), PendingTask.id.desc())
    )


def select_task_on_board(board: str, task_id: int):
    return select(PendingTask).where(
        PendingTask.board == board,
        PendingTask.id == task_id,
    )
