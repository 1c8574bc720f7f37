from __future__ import annotations

import abc
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from bloom.models.enums import Role

@dataclass(frozen=True)
class MemberRow:
    user_id: int
    username: str
    role: Role

@dataclass(frozen=True)
class Stats:
    total_users: int
    total_projects: int
    total_todos: int
    completed_todos: int

class MembershipStore(abc.ABC):
    @abc.abstractmethod
    def get_project_owner(self, project_id: int) -> int | None: ...

    @abc.abstractmethod
    def get_membership_role(self, project_id: int, user_id: int) -> Role | None: ...

    @abc.abstractmethod
    def upsert_membership(self, project_id: int, user_id: int, role: Role) -> None: ...

    # must succeed when the row is absent
    @abc.abstractmethod
    def delete_membership(self, project_id: int, user_id: int) -> None: ...

    @abc.abstractmethod
    def list_memberships(self, project_id: int) -> Sequence[MemberRow]: ...

    @abc.abstractmethod
    def get_todo_parent_project(self, todo_id: int) -> int | None: ...

class Store(MembershipStore):
    # users
    @abc.abstractmethod
    def create_user(self, username: str, email: str, password_hash: str, is_admin: bool = False) -> Any: ...

    @abc.abstractmethod
    def get_user(self, user_id: int) -> Any | None: ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Any | None: ...

    @abc.abstractmethod
    def search_users(self, query: str, exclude_id: int, limit: int = 10) -> Sequence[Any]: ...

    @abc.abstractmethod
    def list_users(self) -> Sequence[Any]: ...

    @abc.abstractmethod
    def update_user(self, user: Any, **changes: Any) -> Any: ...

    @abc.abstractmethod
    def delete_user(self, user_id: int) -> None: ...

    # projects
    @abc.abstractmethod
    def create_project(self, owner_id: int, name: str, description: str = "") -> Any: ...

    @abc.abstractmethod
    def get_project(self, project_id: int) -> Any | None: ...

    @abc.abstractmethod
    def list_projects_for_user(self, user_id: int) -> Sequence[Any]: ...

    @abc.abstractmethod
    def update_project(self, project: Any, **changes: Any) -> Any: ...

    @abc.abstractmethod
    def delete_project(self, project_id: int) -> None: ...

    # todos
    @abc.abstractmethod
    def create_todo(self, project_id: int, **fields: Any) -> Any: ...

    @abc.abstractmethod
    def get_todo(self, todo_id: int) -> Any | None: ...

    @abc.abstractmethod
    def list_todos(self, project_id: int) -> Sequence[Any]: ...

    @abc.abstractmethod
    def update_todo(self, todo: Any, **changes: Any) -> Any: ...

    @abc.abstractmethod
    def delete_todo(self, todo_id: int) -> None: ...

    # admin
    @abc.abstractmethod
    def get_stats(self) -> Stats: ...
