from .user import UserCreate, UserLogin, UserOut, UserUpdateMe, PasswordUpdate, UserResponse
from .tokens import AuthResponse
from .task import TaskCreate, TaskUpdate, TaskOut, TaskStatus, TaskPriority, TaskResponse, TaskListResponse, DashboardOut, DashboardResponse
from .settings import SettingsUpdate, SettingsOut, SettingsResponse
