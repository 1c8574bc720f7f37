from enum import Enum

from bloom.models.enums import Role

class Action(str, Enum):
    read_project = "read_project"
    update_project = "update_project"
    delete_project = "delete_project"
    view_role = "view_role"

    list_members = "list_members"
    add_member = "add_member"
    remove_member = "remove_member"

    list_todos = "list_todos"
    read_todo = "read_todo"
    create_todo = "create_todo"
    update_todo = "update_todo"
    delete_todo = "delete_todo"

# minimum role per action; any higher role is allowed too
PERMS: dict[Action, Role] = {
    Action.read_project: Role.viewer,
    Action.view_role: Role.viewer,
    Action.list_members: Role.viewer,
    Action.list_todos: Role.viewer,
    Action.read_todo: Role.viewer,

    Action.create_todo: Role.editor,
    Action.update_todo: Role.editor,
    Action.delete_todo: Role.editor,

    Action.update_project: Role.owner,
    Action.delete_project: Role.owner,
    Action.add_member: Role.owner,
    Action.remove_member: Role.owner,
}

def required_role(action: Action | str) -> Role:
    try:
        return PERMS[Action(action)]
    except ValueError:
        raise RuntimeError(f"unknown permission action: {action}") from None

def permits(role: Role, action: Action | str) -> bool:
    return role is not Role.none and role >= required_role(action)
