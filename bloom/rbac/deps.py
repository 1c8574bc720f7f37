from dataclasses import dataclass

from fastapi import Depends

from bloom.auth.deps import get_current_user
from bloom.models.enums import Role
from bloom.models.user import User
from bloom.rbac.engine import AccessControl
from bloom.rbac.perms import Action, required_role
from bloom.store.base import Store
from bloom.store.deps import get_store

def get_access(store: Store = Depends(get_store)) -> AccessControl:
    return AccessControl(store)

@dataclass
class ProjectContext:
    project_id: int
    user: User
    role: Role

@dataclass
class TodoContext(ProjectContext):
    todo_id: int

def require_perm(action: Action):
    # unknown actions fail when the route is declared, not per request
    required_role(action)

    def _checker(
        project_id: int,
        user: User = Depends(get_current_user),
        access: AccessControl = Depends(get_access),
    ) -> ProjectContext:
        role = access.require(project_id, user.id, action)
        return ProjectContext(project_id=project_id, user=user, role=role)

    return _checker

def require_todo_perm(action: Action):
    required_role(action)

    def _checker(
        todo_id: int,
        user: User = Depends(get_current_user),
        access: AccessControl = Depends(get_access),
    ) -> TodoContext:
        project_id, role = access.require_todo(todo_id, user.id, action)
        return TodoContext(project_id=project_id, user=user, role=role, todo_id=todo_id)

    return _checker
