from typing import Optional
from pydantic import BaseModel
from .Task import Priority


class TaskCreate(BaseModel):
    # title is optional here so a missing title reaches the lifecycle check and answers 400
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
