from bloom.models.project import Project
from bloom.models.project_member import ProjectMember
from bloom.models.todo import Todo
from bloom.models.user import User

__all__ = ["User", "Project", "ProjectMember", "Todo"]
