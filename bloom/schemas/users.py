from pydantic import BaseModel, EmailStr

class UserUpdateIn(BaseModel):
    username: str | None = None
    email: EmailStr | None = None
    is_admin: bool | None = None

class StatsOut(BaseModel):
    total_users: int
    total_projects: int
    total_todos: int
    completed_todos: int
