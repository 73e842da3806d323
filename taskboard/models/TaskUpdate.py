from pydantic import BaseModel
from typing import Optional
from .Task import Priority, Status


class TaskUpdate(BaseModel):
    status: Optional[Status] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
