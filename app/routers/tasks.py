import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import task as task_model
from app.models import user as user_model
from app.schemas import task as task_schema
from app.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


def get_owned_task(db: Session, task_id: int, owner: user_model.User) -> task_model.Task:
    task = db.query(task_model.Task).filter(
        task_model.Task.id == task_id,
        task_model.Task.owner_id == owner.id,  # other users' tasks look missing
    ).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=task_schema.TaskResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=task_schema.TaskResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_task(
    task: task_schema.TaskCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    db_task = task_model.Task(
        title=task.title,
        description=task.description,
        priority=task_model.TaskPriority(task.priority.value),
        due_date=task.due_date,
        owner_id=current_user.id,
    )
    db_task.apply_status(task_model.TaskStatus(task.status.value))

    db.add(db_task)
    db.commit()
    db.refresh(db_task)

    logger.info("Task %s created by user %s", db_task.id, current_user.id)
    return {"status": "success", "task": db_task}


@router.get("", response_model=task_schema.TaskListResponse)
@router.get("/", response_model=task_schema.TaskListResponse, include_in_schema=False)
def get_all_tasks(
    status_filter: Optional[task_schema.TaskStatus] = Query(default=None, alias="status"),
    priority: Optional[task_schema.TaskPriority] = None,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    query = db.query(task_model.Task).filter(task_model.Task.owner_id == current_user.id)
    if status_filter is not None:
        query = query.filter(task_model.Task.status == task_model.TaskStatus(status_filter.value))
    if priority is not None:
        query = query.filter(task_model.Task.priority == task_model.TaskPriority(priority.value))

    tasks = query.order_by(task_model.Task.created_at.desc(), task_model.Task.id.desc()).all()
    return {"status": "success", "results": len(tasks), "tasks": tasks}


@router.get("/{task_id}", response_model=task_schema.TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return {"status": "success", "task": get_owned_task(db, task_id, current_user)}


@router.patch("/{task_id}", response_model=task_schema.TaskResponse)
def update_task(
    task_id: int,
    task_update: task_schema.TaskUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    task = get_owned_task(db, task_id, current_user)

    # Apply updates (only fields provided in request)
    update_data = task_update.model_dump(exclude_unset=True)
    new_status = update_data.pop("status", None)
    if "priority" in update_data:
        priority = update_data.pop("priority")
        if priority is not None:
            task.priority = task_model.TaskPriority(priority.value)
    if "title" in update_data and update_data["title"] is None:
        raise HTTPException(status_code=400, detail="title: Task title cannot be empty")

    for key, value in update_data.items():
        setattr(task, key, value)
    if new_status is not None:
        task.apply_status(task_model.TaskStatus(new_status.value))

    db.commit()
    db.refresh(task)
    return {"status": "success", "task": task}


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    task = get_owned_task(db, task_id, current_user)
    db.delete(task)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
