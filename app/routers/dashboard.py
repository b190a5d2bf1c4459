# app/routers/dashboard.py
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import func, and_
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import User, Task
from app.models.task import TaskStatus, TaskPriority, CLOSED_STATUSES
from app.utils.auth import get_current_user
from app.utils.dates import utcnow
from app.schemas.task import DashboardResponse

router = APIRouter()

RECENT_TASKS_LIMIT = 5


def build_dashboard(db: Session, user: User, now: Optional[datetime] = None) -> dict:
    """Aggregate task statistics for one user"""
    now = now or utcnow()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_tomorrow = start_of_day + timedelta(days=1)

    task_query = db.query(Task).filter(Task.owner_id == user.id)
    open_tasks = task_query.filter(~Task.status.in_(CLOSED_STATUSES))

    by_status = {s.value: 0 for s in TaskStatus}
    for task_status, count in (
        db.query(Task.status, func.count(Task.id))
        .filter(Task.owner_id == user.id)
        .group_by(Task.status)
        .all()
    ):
        by_status[task_status.value] = count

    by_priority = {p.value: 0 for p in TaskPriority}
    for priority, count in (
        db.query(Task.priority, func.count(Task.id))
        .filter(Task.owner_id == user.id)
        .group_by(Task.priority)
        .all()
    ):
        by_priority[priority.value] = count

    total = sum(by_status.values())
    finished = by_status[TaskStatus.FINISHED.value]

    overdue = open_tasks.filter(Task.due_date < now).count()
    due_today = open_tasks.filter(
        and_(Task.due_date >= start_of_day, Task.due_date < start_of_tomorrow)
    ).count()
    upcoming = open_tasks.filter(Task.due_date >= start_of_tomorrow).count()

    recent_tasks = (
        task_query.order_by(Task.updated_at.desc(), Task.id.desc())
        .limit(RECENT_TASKS_LIMIT)
        .all()
    )

    return {
        "total": total,
        "finished": finished,
        "overdue": overdue,
        "due_today": due_today,
        "upcoming": upcoming,
        "completion_rate": round(finished / total, 2) if total else 0.0,
        "by_status": by_status,
        "by_priority": by_priority,
        "recent_tasks": recent_tasks,
    }


@router.get("", response_model=DashboardResponse)
@router.get("/", response_model=DashboardResponse, include_in_schema=False)
def get_dashboard_overview(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the caller's dashboard overview statistics"""
    return {"status": "success", "dashboard": build_dashboard(db, current_user)}
