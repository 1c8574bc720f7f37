from datetime import datetime

from pydantic import BaseModel

from bloom.models.enums import TodoPriority, TodoStatus

class TodoCreateIn(BaseModel):
    title: str
    description: str = ""
    status: TodoStatus = TodoStatus.pending
    priority: TodoPriority = TodoPriority.medium
    deadline: str | None = None

class TodoUpdateIn(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TodoStatus | None = None
    priority: TodoPriority | None = None
    # "" clears the deadline
    deadline: str | None = None

class TodoOut(BaseModel):
    id: int
    project_id: int
    title: str
    description: str
    status: TodoStatus
    priority: TodoPriority
    deadline: datetime | None
    created_at: datetime
    updated_at: datetime
