from .Task import ALL, PRIORITIES, STATUSES, Priority, Status, Task
from .TasksCreate import TaskCreate
from .TaskUpdate import TaskUpdate
from .TaskResponse import MessageResponse, TaskResponse

__all__ = [
    "ALL",
    "PRIORITIES",
    "STATUSES",
    "Priority",
    "Status",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "MessageResponse",
]
