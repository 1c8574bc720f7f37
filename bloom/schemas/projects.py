from datetime import datetime

from pydantic import BaseModel

from bloom.models.enums import Role

class ProjectCreateIn(BaseModel):
    name: str
    description: str = ""

class ProjectUpdateIn(BaseModel):
    name: str = ""
    description: str = ""

class ProjectOut(BaseModel):
    id: int
    name: str
    description: str
    owner_id: int
    owner_name: str | None = None
    created_at: datetime
    updated_at: datetime

class RoleOut(BaseModel):
    role: Role

class MemberAddIn(BaseModel):
    username: str
    # validated by the access engine so bad values surface as InvalidRole;
    # missing, null or empty means viewer
    role: str | None = None

class MemberOut(BaseModel):
    project_id: int
    user_id: int
    username: str
    role: Role
