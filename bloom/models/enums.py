from enum import Enum

class Role(str, Enum):
    """Effective role of a user on a project, ordered owner > editor > viewer > none."""

    none = "none"
    viewer = "viewer"
    editor = "editor"
    owner = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank >= other.rank

_ROLE_RANK = {Role.none: 0, Role.viewer: 1, Role.editor: 2, Role.owner: 3}

# roles a membership row may carry; ownership lives on projects.owner_id
MEMBER_ROLES = frozenset({Role.viewer, Role.editor})

class TodoStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"

class TodoPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
