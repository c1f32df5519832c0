"""
Weekly tasks with photo-proof completions.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flowops.core.deps import get_current_principal
from flowops.core.policy import Principal, resolve_establishment
from flowops.db.session import get_db
from flowops.schemas.common import MessageResponse
from flowops.schemas.task import (
    TaskCompleteRequest,
    TaskCompletionResponse,
    WeeklyTaskCreate,
    WeeklyTaskResponse,
    WeeklyTaskUpdate,
)
from flowops.services.store import TaskCompletionStore, WeeklyTaskStore
from flowops.services.timeline import TimelineRecorder

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[WeeklyTaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [WeeklyTaskResponse.model_validate(t) for t in WeeklyTaskStore(db).list(principal)]


@router.post("", response_model=WeeklyTaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: WeeklyTaskCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    task = WeeklyTaskStore(db).create(
        task_data,
        establishment=resolve_establishment(principal, task_data.establishment),
    )
    TimelineRecorder(db).task_created(principal, task)
    db.commit()
    db.refresh(task)
    return WeeklyTaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=WeeklyTaskResponse)
def update_task(
    task_id: UUID,
    update_data: WeeklyTaskUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    task = WeeklyTaskStore(db).update(task_id, update_data, principal)
    db.commit()
    db.refresh(task)
    return WeeklyTaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Delete a task together with its completion history."""
    WeeklyTaskStore(db).delete(task_id, principal)
    db.commit()
    return MessageResponse(message="Task deleted")


@router.post("/{task_id}/complete", response_model=TaskCompletionResponse, status_code=status.HTTP_201_CREATED)
def complete_task(
    task_id: UUID,
    completion_data: TaskCompleteRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Record a completion with photo proof and mark the task completed."""
    tasks = WeeklyTaskStore(db)
    tasks.get(task_id, principal)

    completion = TaskCompletionStore(db).create(
        {"task_id": task_id, "completed_by": principal.name, "photo": completion_data.photo}
    )
    task = tasks.update(task_id, {"completed": True}, principal, completed_at=completion.completed_at)
    TimelineRecorder(db).task_completed(principal, task, completion.photo)
    db.commit()
    db.refresh(completion)
    return TaskCompletionResponse.model_validate(completion)


@router.get("/{task_id}/completions", response_model=List[TaskCompletionResponse])
def list_task_completions(
    task_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Completion history of one task, newest first."""
    WeeklyTaskStore(db).get(task_id, principal)
    completions = TaskCompletionStore(db).list(principal, task_id=task_id)
    return [TaskCompletionResponse.model_validate(c) for c in completions]
