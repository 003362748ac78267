# api/tasks/views.py
"""
Pending-task board endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from db_models.pending_task import PendingBoard
from .models import (
    TaskCreate,
    TaskCompletedUpdate,
    TaskImportanceUpdate,
    TaskRead,
    TaskBoardResponse,
)
from . import db_manager

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "/{board}",
    response_model=TaskBoardResponse,
    summary="List tasks on a board",
)
async def list_tasks_endpoint(
    board: PendingBoard,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TaskBoardResponse:
    tasks = await db_manager.list_tasks(db, board)
    return TaskBoardResponse(
        board=board.value,
        tasks=[TaskRead.model_validate(t) for t in tasks],
        completed_count=sum(1 for t in tasks if t.completed),
        total_count=len(tasks),
    )


@router.post(
    "/{board}",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task_endpoint(
    board: PendingBoard,
    payload: TaskCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TaskRead:
    task = await db_manager.create_task(db, board, payload)
    return TaskRead.model_validate(task)


@router.patch(
    "/{board}/{task_id}/completed",
    response_model=TaskRead,
    summary="Mark a task complete or incomplete",
)
async def set_completed_endpoint(
    board: PendingBoard,
    task_id: int,
    payload: TaskCompletedUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TaskRead:
    try:
        task = await db_manager.set_completed(db, board, task_id, payload.completed)
    except db_manager.TaskNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return TaskRead.model_validate(task)


@router.patch(
    "/{board}/{task_id}/importance",
    response_model=TaskRead,
    summary="Change task importance",
)
async def set_importance_endpoint(
    board: PendingBoard,
    task_id: int,
    payload: TaskImportanceUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> TaskRead:
    try:
        task = await db_manager.set_importance(db, board, task_id, payload.importance)
    except db_manager.TaskNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return TaskRead.model_validate(task)
