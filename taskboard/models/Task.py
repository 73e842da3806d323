from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel

Status = Literal["TODO", "IN_PROGRESS", "COMPLETED"]
Priority = Literal["LOW", "MEDIUM", "HIGH"]

STATUSES = ("TODO", "IN_PROGRESS", "COMPLETED")
PRIORITIES = ("LOW", "MEDIUM", "HIGH")

# filter sentinel meaning "no constraint"
ALL = "ALL"


class Task(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: Status = "TODO"
    priority: Priority = "MEDIUM"
    createdAt: datetime
    updatedAt: datetime
    completedAt: Optional[datetime] = None
