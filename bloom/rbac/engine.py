import logging
from typing import NamedTuple

from bloom.errors import AccessDenied, InvalidRole, ResourceNotFound, SelfMembershipRejected
from bloom.models.enums import MEMBER_ROLES, Role
from bloom.rbac.perms import Action, permits, required_role
from bloom.store.base import MemberRow, MembershipStore

logger = logging.getLogger(__name__)

class Verdict(NamedTuple):
    permitted: bool
    role: Role

def parse_member_role(value: Role | str) -> Role:
    try:
        role = Role(value)
    except ValueError:
        raise InvalidRole() from None
    if role not in MEMBER_ROLES:
        raise InvalidRole()
    return role

class AccessControl:
    def __init__(self, store: MembershipStore):
        self.store = store

    def resolve_role(self, project_id: int, user_id: int) -> Role:
        owner_id = self.store.get_project_owner(project_id)
        if owner_id is None:
            raise ResourceNotFound("project not found")

        # ownership wins over any stray membership row
        if owner_id == user_id:
            return Role.owner

        role = self.store.get_membership_role(project_id, user_id)
        return role if role is not None else Role.none

    def authorize(self, project_id: int, user_id: int, action: Action | str) -> Verdict:
        role = self.resolve_role(project_id, user_id)
        return Verdict(permitted=permits(role, action), role=role)

    def is_member(self, project_id: int, user_id: int) -> bool:
        return self.resolve_role(project_id, user_id) is not Role.none

    def require(self, project_id: int, user_id: int, action: Action | str) -> Role:
        """Resolve the caller's role and raise ``AccessDenied`` unless it allows ``action``."""
        permitted, role = self.authorize(project_id, user_id, action)
        if not permitted:
            logger.debug("deny user=%s project=%s action=%s role=%s", user_id, project_id, action, role.value)
            raise AccessDenied(_deny_detail(role, action))
        return role

    def todo_project(self, todo_id: int) -> int:
        project_id = self.store.get_todo_parent_project(todo_id)
        if project_id is None:
            raise ResourceNotFound("todo not found")
        return project_id

    def authorize_todo(self, todo_id: int, user_id: int, action: Action | str) -> Verdict:
        return self.authorize(self.todo_project(todo_id), user_id, action)

    def require_todo(self, todo_id: int, user_id: int, action: Action | str) -> tuple[int, Role]:
        project_id = self.todo_project(todo_id)
        return project_id, self.require(project_id, user_id, action)

    # membership management

    def add_member(self, project_id: int, caller_id: int, user_id: int, role: Role | str) -> Role:
        self.require(project_id, caller_id, Action.add_member)
        member_role = parse_member_role(role)
        if user_id == caller_id:
            raise SelfMembershipRejected()

        self.store.upsert_membership(project_id, user_id, member_role)
        logger.info("project=%s member user=%s set to %s", project_id, user_id, member_role.value)
        return member_role

    def remove_member(self, project_id: int, caller_id: int, user_id: int) -> None:
        self.require(project_id, caller_id, Action.remove_member)
        self.store.delete_membership(project_id, user_id)
        logger.info("project=%s member user=%s removed", project_id, user_id)

    def list_members(self, project_id: int, caller_id: int) -> list[MemberRow]:
        self.require(project_id, caller_id, Action.list_members)
        return list(self.store.list_memberships(project_id))

def _deny_detail(role: Role, action: Action | str) -> str:
    if role is Role.none:
        return "you do not have access to this project"
    needed = required_role(action)
    if needed is Role.owner:
        return "only the owner can do this"
    return f"{role.value}s cannot {Action(action).value.replace('_', ' ')}"
