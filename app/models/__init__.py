from .user import User
from .task import Task, TaskStatus, TaskPriority
from .settings import UserSettings
