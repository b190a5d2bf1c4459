# app/schemas/task.py
from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional, List, Dict
from enum import Enum

from app.utils.dates import to_naive_utc
from app.utils.sanitize import SanitizedStr, sanitized

TitleStr = sanitized(min_length=1, max_length=200)

class TaskStatus(str, Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    PENDING = "PENDING"
    FINISHED = "FINISHED"
    STOPPED = "STOPPED"
    CANCELLED = "CANCELLED"

class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

class TaskCreate(BaseModel):
    title: TitleStr
    description: Optional[SanitizedStr] = None
    status: TaskStatus = TaskStatus.NEW
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None

    model_config = {
        "extra": "ignore"
    }

    @field_validator('due_date')
    @classmethod
    def normalise_due_date(cls, v):
        return to_naive_utc(v)

class TaskUpdate(BaseModel):
    title: Optional[TitleStr] = None
    description: Optional[SanitizedStr] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None

    model_config = {
        "extra": "ignore"
    }

    @field_validator('due_date')
    @classmethod
    def normalise_due_date(cls, v):
        return to_naive_utc(v)

class TaskOut(BaseModel):
    id: int
    owner_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

    @field_validator('status', 'priority', mode='before')
    @classmethod
    def unwrap_model_enum(cls, v):
        # ORM rows carry the model-side Enum members
        return getattr(v, 'value', v)

class TaskResponse(BaseModel):
    status: str = "success"
    task: TaskOut

class TaskListResponse(BaseModel):
    status: str = "success"
    results: int
    tasks: List[TaskOut]

class DashboardOut(BaseModel):
    total: int
    finished: int
    overdue: int
    due_today: int
    upcoming: int
    completion_rate: float
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    recent_tasks: List[TaskOut]

class DashboardResponse(BaseModel):
    status: str = "success"
    dashboard: DashboardOut
