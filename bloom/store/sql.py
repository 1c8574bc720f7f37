import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from bloom.errors import Conflict, StorageUnavailable
from bloom.models.enums import Role, TodoStatus
from bloom.models.project import Project
from bloom.models.project_member import ProjectMember
from bloom.models.todo import Todo
from bloom.models.user import User
from bloom.store.base import MemberRow, Stats, Store

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

class SqlStore(Store):
    """SQLAlchemy-backed store bound to one session (one request)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, op: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.info("%s: integrity error: %s", op, e.orig)
            raise Conflict() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("%s: storage failure: %s", op, e)
            raise StorageUnavailable() from e

    # access

    def get_project_owner(self, project_id: int) -> int | None:
        with self._guard("get_project_owner"):
            return self.db.scalar(select(Project.owner_id).where(Project.id == project_id))

    def get_membership_role(self, project_id: int, user_id: int) -> Role | None:
        with self._guard("get_membership_role"):
            return self.db.scalar(
                select(ProjectMember.role).where(
                    ProjectMember.project_id == project_id,
                    ProjectMember.user_id == user_id,
                )
            )

    def upsert_membership(self, project_id: int, user_id: int, role: Role) -> None:
        insert = _UPSERT_INSERTS[self.db.get_bind().dialect.name]
        stmt = insert(ProjectMember).values(project_id=project_id, user_id=user_id, role=role)
        stmt = stmt.on_conflict_do_update(
            index_elements=["project_id", "user_id"],
            set_={"role": stmt.excluded.role},
        )
        with self._guard("upsert_membership"):
            self.db.execute(stmt)
            self.db.commit()

    def delete_membership(self, project_id: int, user_id: int) -> None:
        with self._guard("delete_membership"):
            m = self.db.get(ProjectMember, {"project_id": project_id, "user_id": user_id})
            if m is None:
                return
            self.db.delete(m)
            self.db.commit()

    def list_memberships(self, project_id: int) -> list[MemberRow]:
        q = (
            select(ProjectMember.user_id, User.username, ProjectMember.role)
            .join(User, User.id == ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(User.username, ProjectMember.user_id)
        )
        with self._guard("list_memberships"):
            rows = self.db.execute(q).all()
        return [MemberRow(user_id=r.user_id, username=r.username, role=r.role) for r in rows]

    def get_todo_parent_project(self, todo_id: int) -> int | None:
        with self._guard("get_todo_parent_project"):
            return self.db.scalar(select(Todo.project_id).where(Todo.id == todo_id))

    # users

    def create_user(self, username: str, email: str, password_hash: str, is_admin: bool = False) -> User:
        u = User(username=username, email=email, password_hash=password_hash, is_admin=is_admin)
        with self._guard("create_user"):
            self.db.add(u)
            self.db.commit()
            self.db.refresh(u)
        return u

    def get_user(self, user_id: int) -> User | None:
        with self._guard("get_user"):
            return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._guard("get_user_by_username"):
            return self.db.scalar(select(User).where(User.username == username))

    def search_users(self, query: str, exclude_id: int, limit: int = 10) -> Sequence[User]:
        q = (
            select(User)
            .where(
                User.id != exclude_id,
                or_(
                    User.username.icontains(query, autoescape=True),
                    User.email.icontains(query, autoescape=True),
                ),
            )
            .order_by(User.username)
            .limit(limit)
        )
        with self._guard("search_users"):
            return self.db.scalars(q).all()

    def list_users(self) -> Sequence[User]:
        with self._guard("list_users"):
            return self.db.scalars(select(User).order_by(User.id)).all()

    def update_user(self, user: User, **changes: Any) -> User:
        with self._guard("update_user"):
            for k, v in changes.items():
                setattr(user, k, v)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> None:
        with self._guard("delete_user"):
            u = self.db.get(User, user_id)
            if u is None:
                return
            self.db.delete(u)
            self.db.commit()

    # projects

    def create_project(self, owner_id: int, name: str, description: str = "") -> Project:
        p = Project(owner_id=owner_id, name=name, description=description)
        with self._guard("create_project"):
            self.db.add(p)
            self.db.commit()
            self.db.refresh(p)
        return p

    def get_project(self, project_id: int) -> Project | None:
        with self._guard("get_project"):
            return self.db.get(Project, project_id)

    def list_projects_for_user(self, user_id: int) -> Sequence[Project]:
        shared = select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        q = (
            select(Project)
            .options(selectinload(Project.owner))
            .where(or_(Project.owner_id == user_id, Project.id.in_(shared)))
            .order_by(Project.updated_at.desc(), Project.id.desc())
        )
        with self._guard("list_projects_for_user"):
            return self.db.scalars(q).all()

    def update_project(self, project: Project, **changes: Any) -> Project:
        with self._guard("update_project"):
            for k, v in changes.items():
                setattr(project, k, v)
            self.db.add(project)
            self.db.commit()
            self.db.refresh(project)
        return project

    def delete_project(self, project_id: int) -> None:
        with self._guard("delete_project"):
            p = self.db.get(Project, project_id)
            if p is None:
                return
            self.db.delete(p)
            self.db.commit()

    # todos

    def create_todo(self, project_id: int, **fields: Any) -> Todo:
        t = Todo(project_id=project_id, **fields)
        with self._guard("create_todo"):
            self.db.add(t)
            self.db.commit()
            self.db.refresh(t)
        return t

    def get_todo(self, todo_id: int) -> Todo | None:
        with self._guard("get_todo"):
            return self.db.get(Todo, todo_id)

    def list_todos(self, project_id: int) -> Sequence[Todo]:
        q = (
            select(Todo)
            .where(Todo.project_id == project_id)
            .order_by(Todo.created_at.desc(), Todo.id.desc())
        )
        with self._guard("list_todos"):
            return self.db.scalars(q).all()

    def update_todo(self, todo: Todo, **changes: Any) -> Todo:
        with self._guard("update_todo"):
            for k, v in changes.items():
                setattr(todo, k, v)
            self.db.add(todo)
            self.db.commit()
            self.db.refresh(todo)
        return todo

    def delete_todo(self, todo_id: int) -> None:
        with self._guard("delete_todo"):
            t = self.db.get(Todo, todo_id)
            if t is None:
                return
            self.db.delete(t)
            self.db.commit()

    # admin

    def get_stats(self) -> Stats:
        def count(model, *where) -> int:
            q = select(func.count()).select_from(model)
            if where:
                q = q.where(*where)
            return self.db.scalar(q) or 0

        with self._guard("get_stats"):
            return Stats(
                total_users=count(User),
                total_projects=count(Project),
                total_todos=count(Todo),
                completed_todos=count(Todo, Todo.status == TodoStatus.completed),
            )
