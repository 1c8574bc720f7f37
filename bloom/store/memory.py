import threading
from collections.abc import Sequence

from bloom.errors import StorageUnavailable
from bloom.models.enums import Role
from bloom.store.base import MemberRow, MembershipStore

class InMemoryStore(MembershipStore):
    """Dict-backed membership store for tests and local experiments.

    ``calls`` records every interface operation in order so tests can assert
    which reads and writes happened. Setting ``unavailable`` makes every
    operation raise ``StorageUnavailable``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.users: dict[int, str] = {}
        self.owners: dict[int, int] = {}
        self.members: dict[tuple[int, int], Role] = {}
        self.todos: dict[int, int] = {}
        self.calls: list[str] = []
        self.unavailable = False

    # seeding helpers

    def add_user(self, user_id: int, username: str) -> None:
        self.users[user_id] = username

    def add_project(self, project_id: int, owner_id: int) -> None:
        self.owners[project_id] = owner_id

    def add_todo(self, todo_id: int, project_id: int) -> None:
        self.todos[todo_id] = project_id

    def drop_project(self, project_id: int, cascade: bool = True) -> None:
        self.owners.pop(project_id, None)
        if not cascade:
            return
        self.members = {k: v for k, v in self.members.items() if k[0] != project_id}
        self.todos = {k: v for k, v in self.todos.items() if v != project_id}

    @property
    def writes(self) -> list[str]:
        return [c for c in self.calls if c in ("upsert_membership", "delete_membership")]

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        if self.unavailable:
            raise StorageUnavailable()

    # MembershipStore

    def get_project_owner(self, project_id: int) -> int | None:
        self._enter("get_project_owner")
        return self.owners.get(project_id)

    def get_membership_role(self, project_id: int, user_id: int) -> Role | None:
        self._enter("get_membership_role")
        return self.members.get((project_id, user_id))

    def upsert_membership(self, project_id: int, user_id: int, role: Role) -> None:
        self._enter("upsert_membership")
        with self._lock:
            self.members[(project_id, user_id)] = role

    def delete_membership(self, project_id: int, user_id: int) -> None:
        self._enter("delete_membership")
        with self._lock:
            self.members.pop((project_id, user_id), None)

    def list_memberships(self, project_id: int) -> Sequence[MemberRow]:
        self._enter("list_memberships")
        rows = [
            MemberRow(user_id=uid, username=self.users.get(uid, ""), role=role)
            for (pid, uid), role in self.members.items()
            if pid == project_id
        ]
        return sorted(rows, key=lambda r: (r.username, r.user_id))

    def get_todo_parent_project(self, todo_id: int) -> int | None:
        self._enter("get_todo_parent_project")
        return self.todos.get(todo_id)
