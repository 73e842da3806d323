from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from .Task import Priority, Status, Task


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: Status
    priority: Priority
    createdAt: datetime
    updatedAt: datetime
    completedAt: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


class MessageResponse(BaseModel):
    message: str
